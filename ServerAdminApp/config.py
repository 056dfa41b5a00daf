from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from typing import List
from .structured_logger import StructuredLogger, set_log_level


class ConfigError(Exception):
    pass


class Config:
    COMMAND_NAME: str = "server"
    COMMAND_ALIASES: List[str] = ["srv"]
    PERMISSION: str = "server.debug"
    DEFAULT_LOCALE: str = "en"
    MESSAGES_DIR: str = None
    LOG_LEVEL: str = "info"
    LOG_DETAIL_LEVEL: int = 1
    WORLDS: List[str] = ["world", "world_nether", "world_the_end"]

    def load_from_yaml(self, file_path):
        logger = StructuredLogger(__name__, prefix="Config.load_from_yaml()> ")
        yaml_loader = YAML(typ='safe')
        try:
            with open(file_path, 'r', encoding='utf-8') as file:
                config_values = yaml_loader.load(file)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found at {file_path}") from e
        except YAMLError as e:
            message = f"Error parsing config YAML file: {file_path}"
            mark = getattr(e, 'problem_mark', None)
            if mark is not None:
                message += f" (line {mark.line + 1}, column {mark.column + 1})"
            problem = getattr(e, 'problem', None)
            if problem:
                message += f": {problem}"
            raise ConfigError(message) from e

        if config_values is None:
            config_values = {}
        if not isinstance(config_values, dict):
            raise ConfigError(f"Config file {file_path} does not contain a valid dictionary.")

        for key, value in config_values.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning(f"ignoring unknown config key {key} in {file_path}")
        logger.debug(f"loaded config from {file_path}")
        return self

    def validate(self):
        if not self.COMMAND_NAME or not str(self.COMMAND_NAME).strip():
            raise ConfigError("COMMAND_NAME is empty")
        if not isinstance(self.COMMAND_ALIASES, list):
            raise ConfigError("COMMAND_ALIASES must be a list")
        if not isinstance(self.WORLDS, list) or len(set(self.WORLDS)) != len(self.WORLDS):
            raise ConfigError("WORLDS must be a list of distinct names")
        if not self.DEFAULT_LOCALE:
            raise ConfigError("DEFAULT_LOCALE is empty")
        if not isinstance(self.LOG_DETAIL_LEVEL, int) or not 1 <= self.LOG_DETAIL_LEVEL <= 3:
            raise ConfigError("LOG_DETAIL_LEVEL must be 1, 2 or 3")

    def apply_logging(self):
        try:
            set_log_level(self.LOG_LEVEL, self.LOG_DETAIL_LEVEL)
        except ValueError as e:
            raise ConfigError(str(e)) from e


# Default global configuration instance
default_app_config = Config()
