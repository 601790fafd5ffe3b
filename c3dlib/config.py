from pathlib import Path

DATA_PATH = Path("data")
ASSETS_YAML_PATH = DATA_PATH / "assets.yaml"

RESOURCES_PATH = Path("resources")
OUT_PATH = Path("out")
