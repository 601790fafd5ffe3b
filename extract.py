import sys

from argparse import Namespace, ArgumentError

from c3dlib.args import ArgumentParserHandler
from c3dlib.idsoft.errors import AssetLoadError
from c3dlib.types import ExtractInfo
from c3dlib.utils import load_assets_spec, run_extraction

def main() -> None:
	_spec = load_assets_spec()
	_args : Namespace

	try:
		_args = ArgumentParserHandler().validate_against_spec(_spec)
	except ArgumentError as err:
		print(f"[ERROR]\t{ err }")
		sys.exit(1)

	extract_info = ExtractInfo.from_validated(_spec, _args)

	try:
		failures = run_extraction(extract_info)
	except (AssetLoadError, OSError) as err:
		print(f"[ERROR]\t{ extract_info.domain }: { err }")
		sys.exit(1)

	for index, err in failures:
		print(f"[WARN]\t{ extract_info.domain } { index }: { err }")

	print(f"{ extract_info.domain }: extracted to { extract_info.out_dir }, { len(failures) } failed")

if __name__ == "__main__":
	main()
