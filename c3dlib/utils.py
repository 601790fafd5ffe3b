import os
from pathlib import Path
import shutil
import yaml

from typing import Any, Callable, Iterable, assert_never

from c3dlib.config import ASSETS_YAML_PATH
from c3dlib.idsoft.errors import ChunkDecodeError, MapPlaneError
from c3dlib.idsoft.gamemaps import MapHeader, c3dmap, condense_plane, expand_plane, map_headers
from c3dlib.idsoft.picture import load_picture
from c3dlib.idsoft.store import AssetStore
from c3dlib.schema import YAML_SCHEMA
from c3dlib.types import DomainSpec, ExtractInfo, MapsSpec, OutputFormat

Failure = tuple[int, Exception]

def clean_tree(path: Path) -> None:
	if os.path.exists(path):
		shutil.rmtree(path)

def save_bytes(path: Path, data: bytes) -> None:
	with open(path, "wb") as f:
		f.write(data)

def load_text(path: Path) -> str:
	with open(path, encoding="utf-8-sig") as f:
		return f.read()

def load_yaml(path: Path):
	return yaml.safe_load(load_text(path))

def load_assets_spec(path: Path = ASSETS_YAML_PATH) -> dict[str, Any]:
	return YAML_SCHEMA.validate(load_yaml(path))

def index_range(first: int, last: int | None, count: int) -> range:
	return range(first, count if last is None else min(last + 1, count))

def get_output_writer(out_dir: Path, clean: bool) -> Callable[[str, bytes], Path | None]:
	def inner(name: str, data: bytes) -> Path | None:
		path = out_dir / name
		if path.exists() and not clean: return None
		save_bytes(path, data)
		return path
	return inner

def extract_chunks(store: AssetStore, indices: Iterable[int], write: Callable[[str, bytes], Path | None], fmt: OutputFormat) -> list[Failure]:
	failures: list[Failure] = []
	for index in indices:
		try:
			data = store.chunk(index)
		except ChunkDecodeError as err:
			failures.append((index, err))
			continue
		if data is None: continue
		write(f"{index}{fmt!s}", data)
	return failures

def extract_pictures(store: AssetStore, indices: Iterable[int], write: Callable[[str, bytes], Path | None]) -> list[Failure]:
	failures: list[Failure] = []
	for index in indices:
		try:
			picture = load_picture(store, index)
		except (ChunkDecodeError, IndexError) as err:
			failures.append((index, err))
			continue
		if picture is None: continue
		write(f"{index}_{picture.dims}{OutputFormat.RGBA!s}", picture.rgba_bytes())
	return failures

def extract_maps(container: bytes, headers: list[MapHeader], layout: MapsSpec, indices: Iterable[int], write: Callable[[str, bytes], Path | None]) -> list[Failure]:
	failures: list[Failure] = []
	for index in indices:
		header = headers[index]
		try:
			planes = [condense_plane(expand_plane(container, header, plane)) for plane in layout.planes]
			data = c3dmap(header, planes)
		except MapPlaneError as err:
			failures.append((index, err))
			continue
		write(f"{index}_{header.name.replace(' ', '_')}{layout.output!s}", data)
	return failures

def run_extraction(info: ExtractInfo) -> list[Failure]:
	if info.clean: clean_tree(info.out_dir)
	info.out_dir.mkdir(parents=True, exist_ok=True)
	write = get_output_writer(info.out_dir, info.clean)

	match info.layout:
		case DomainSpec() as layout:
			store = AssetStore.open(layout, info.resources)
			indices = index_range(info.first, info.last, len(store) - 1)
			if layout.output == OutputFormat.RGBA and not info.raw:
				return extract_pictures(store, indices, write)
			fmt = OutputFormat.BIN if layout.output == OutputFormat.RGBA else layout.output
			return extract_chunks(store, indices, write, fmt)
		case MapsSpec() as layout:
			container = (info.resources / layout.data).read_bytes()
			headers = map_headers(container, layout.delimiter)
			return extract_maps(container, headers, layout, index_range(info.first, info.last, len(headers)), write)
		case _:
			assert_never(info.layout)
