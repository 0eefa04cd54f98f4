import logging
from dataclasses import dataclass, fields

from step_report.utils.utils import read_from_yaml

UNEXPLAINED_OPEN_STEP_POLICIES = ("raise", "attach")


@dataclass
class TrackerConfig:
    # what finalize does with an open step that has no failed child to blame
    unexplained_open_step: str = "raise"
    log_level: str = "INFO"
    indent_marker: str = "==="

    def __post_init__(self):
        if self.unexplained_open_step not in UNEXPLAINED_OPEN_STEP_POLICIES:
            raise ValueError(
                f"Invalid unexplained_open_step: '{self.unexplained_open_step}', "
                f"expecting one of {UNEXPLAINED_OPEN_STEP_POLICIES}"
            )

        if not isinstance(self.log_level, str):
            raise ValueError(
                f"Invalid log_level: {self.log_level!r}, expecting a level name"
            )
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid log_level: '{self.log_level}'")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_yaml(cls, file_path) -> "TrackerConfig":
        """
        Build a config from a YAML mapping.

        Keys missing from the file keep their defaults, an empty file gives
        the default config.

        :param file_path: Path of the YAML file to read.
        :return: The loaded config.
        """
        values = read_from_yaml(file_path)
        if not isinstance(values, dict):
            raise ValueError(f"Expecting a mapping in {file_path}, got {type(values)}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {file_path}: {unknown}")
        return cls(**values)
