import yaml


def read_from_yaml(file_path) -> dict:
    with open(file_path, "r") as f:
        return yaml.safe_load(f) or {}
