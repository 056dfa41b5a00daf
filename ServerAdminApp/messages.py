import os
import yaml
from typing import Dict, Iterable
from .communication import ChatColor
from .constants import Constants
from .structured_logger import StructuredLogger


class ResourceBundle:
    """Flat key -> template mapping loaded from a messages_<locale>.yaml file."""

    _bundles: Dict[str, 'ResourceBundle'] = {}

    def __init__(self, locale: str, strings: Dict[str, str]):
        self.locale = locale
        self.strings = strings

    @classmethod
    def load(cls, file_path: str, locale: str) -> 'ResourceBundle':
        logger = StructuredLogger(__name__, prefix="ResourceBundle.load()> ")
        logger.debug(f"loading {locale} messages from {file_path}")
        with open(file_path, "r", encoding="utf-8") as yf:
            yaml_data = yaml.safe_load(yf) or {}
        if not isinstance(yaml_data, dict):
            raise ValueError(f"Messages file {file_path} does not contain a mapping.")
        return cls(locale, {str(key): str(value) for key, value in yaml_data.items()})

    @classmethod
    def get_bundle(cls, locale: str = None, messages_dir: str = None) -> 'ResourceBundle':
        """Cached bundle for the locale, falling back to its language and then the default locale."""
        locale = locale or Constants.DEFAULT_LOCALE
        messages_dir = messages_dir or os.path.dirname(os.path.abspath(__file__))
        cache_key = f"{messages_dir}:{locale}"
        if cache_key in cls._bundles:
            return cls._bundles[cache_key]
        candidates = [locale, locale.replace('-', '_').split('_')[0], Constants.DEFAULT_LOCALE]
        for candidate in candidates:
            file_path = os.path.join(messages_dir, Constants.MESSAGES_FILE_PATTERN.format(locale=candidate))
            if os.path.exists(file_path):
                bundle = cls.load(file_path, candidate)
                cls._bundles[cache_key] = bundle
                return bundle
        raise FileNotFoundError(f"No messages file for locale {locale} in {messages_dir}")

    @classmethod
    def clear_cache(cls):
        cls._bundles = {}

    def get_string(self, key: str) -> str:
        if key in self.strings:
            return self.strings[key]
        logger = StructuredLogger(__name__, prefix="ResourceBundle.get_string()> ")
        logger.warning(f"missing message key {key} for locale {self.locale}")
        return key

    def keys(self):
        return self.strings.keys()


class LocalizedString:
    """A message key bound to a bundle; renders with {0}, {1}... positional arguments."""

    def __init__(self, key: str, resource_bundle: ResourceBundle):
        self.key = key
        self.resource_bundle = resource_bundle

    def get(self) -> str:
        return self.resource_bundle.get_string(self.key)

    def format(self, *args) -> str:
        template = self.get()
        if not args:
            return template
        try:
            return template.format(*[str(arg) for arg in args])
        except (IndexError, KeyError, ValueError) as e:
            logger = StructuredLogger(__name__, prefix="LocalizedString.format()> ")
            logger.warning(f"bad template for {self.key}: {e}")
            return f"{template} {' '.join(str(arg) for arg in args)}"

    def send(self, sender, *args) -> str:
        text = self.format(*args)
        sender.send_message(text)
        return text

    def send_in_color(self, color: ChatColor, sender, *args) -> str:
        text = f"{color}{self.format(*args)}"
        sender.send_message(text)
        return text

    def __str__(self):
        return self.get()


class CommandMessages:
    """Per-invocation access to the messages a command needs."""

    def __init__(self, resource_bundle: ResourceBundle, permission_message: str = None):
        self.resource_bundle = resource_bundle
        self.permission_message = permission_message or LocalizedString(
            f"{Constants.MESSAGE_PREFIX}.permission-denied", resource_bundle).get()

    def get_resource_bundle(self) -> ResourceBundle:
        return self.resource_bundle

    def get_permission_message(self) -> str:
        return self.permission_message

    def get_not_physical(self) -> LocalizedString:
        return LocalizedString(f"{Constants.MESSAGE_PREFIX}.not-physical", self.resource_bundle)

    def join_list(self, items: Iterable) -> str:
        items = [str(item) for item in items]
        prefix = Constants.MESSAGE_PREFIX
        if not items:
            return LocalizedString(f"{prefix}.list.empty", self.resource_bundle).get()
        if len(items) == 1:
            return items[0]
        separator = LocalizedString(f"{prefix}.list.separator", self.resource_bundle).get()
        last_separator = LocalizedString(f"{prefix}.list.last-separator", self.resource_bundle).get()
        return separator.join(items[:-1]) + last_separator + items[-1]
