import inspect
import logging
import structlog
import yaml
from typing import List, Optional

# Configure the standard Python logging to work with structlog
logging.basicConfig(
    format="%(message)s",
    level=logging.INFO,
)

DETAIL_LEVELS = {
    "debug": 1,
    "debug2": 2,
    "debug3": 3,
}


def add_caller_info(_, __, event_dict):
    """Add the caller's function name and line number to the log entry."""
    internal_modules = ['structlog', 'logging', 'structured_logger.py']
    frame = inspect.currentframe()
    while frame:
        frame = frame.f_back
        if not frame:
            break
        module_name = frame.f_code.co_filename
        if not any(internal in module_name for internal in internal_modules):
            event_dict["function"] = frame.f_code.co_name
            event_dict["file"] = module_name.replace("\\", "/").split("/")[-1]
            event_dict["line"] = frame.f_lineno
            break
    return event_dict


class DetailLevelFilter:
    """Drop debug events that are more detailed than the configured level."""

    def __init__(self, default_level=1):
        self.default_level = default_level
        self.module_levels = {}

    def set_level(self, module=None, level=1):
        if module:
            self.module_levels[module] = level
        else:
            self.default_level = level

    def get_level(self, module=None):
        if module and module in self.module_levels:
            return self.module_levels[module]
        return self.default_level

    def __call__(self, logger, method_name, event_dict):
        detail_level = event_dict.pop("_detail_level", 1)
        current_level = self.get_level(event_dict.get("logger"))
        # debug (1) < debug2 (2) < debug3 (3)
        if method_name == "debug" and detail_level > current_level:
            raise structlog.DropEvent
        return event_dict


def add_prefix(_, __, event_dict):
    prefix = event_dict.pop("_prefix", "")
    if prefix and "event" in event_dict:
        event_dict["event"] = f"{prefix}{event_dict['event']}"
    return event_dict


class PrefixFilter:
    """Filter log events by prefix. None means allow all."""

    def __init__(self):
        self.allowed_prefixes = None

    def set_allowed_prefixes(self, prefixes=None):
        self.allowed_prefixes = prefixes

    def get_allowed_prefixes(self):
        return self.allowed_prefixes

    def __call__(self, logger, method_name, event_dict):
        if not self.allowed_prefixes:
            return event_dict
        message = event_dict.get("event", "")
        if any(message.startswith(prefix) for prefix in self.allowed_prefixes):
            return event_dict
        raise structlog.DropEvent


def format_yaml_values(_, __, event_dict):
    """Format complex values as YAML for better readability."""
    for key, value in list(event_dict.items()):
        if not isinstance(value, (str, int, float, bool, type(None))):
            try:
                yaml_str = yaml.safe_dump(value, default_flow_style=False)
            except yaml.YAMLError:
                event_dict[key] = str(value)
                continue
            if '\n' in yaml_str.strip():
                lines = yaml_str.strip().split('\n')
                yaml_str = lines[0] + ' |\n  ' + '\n  '.join(lines[1:])
            event_dict[key] = yaml_str.strip()
    return event_dict


class MessageStore:
    """Keep rendered-ish copies of log events while a capture is active."""

    def __init__(self):
        self.messages = []
        self.active = False

    def start_capture(self):
        self.messages = []
        self.active = True

    def stop_capture(self):
        self.active = False
        return list(self.messages)

    def get_messages(self):
        return list(self.messages)

    def clear(self):
        self.messages = []

    def __call__(self, logger, method_name, event_dict):
        if self.active:
            msg = f"{event_dict.get('level', 'info').upper()} "
            if "function" in event_dict:
                msg += f"[{event_dict.get('file', '')}:{event_dict.get('function', '')}:{event_dict.get('line', '')}] "
            msg += str(event_dict.get("event", ""))
            for key, value in event_dict.items():
                if key not in ("level", "function", "file", "line", "event", "logger", "timestamp"):
                    msg += f" {key}={value}"
            self.messages.append(msg)
        return event_dict


class CustomConsoleRenderer:
    """Render '<MM-DD HH:MM:SS> [LVL] message' lines, extra fields indented below."""

    def __init__(self, colors=True):
        self.colors = colors
        self.level_to_color = {
            'critical': '\x1b[31;1m',
            'exception': '\x1b[31;1m',
            'error': '\x1b[31m',
            'warning': '\x1b[33m',
            'info': '\x1b[32m',
            'debug': '\x1b[34m',
        }
        self.reset_color = '\x1b[0m'
        self.level_abbrevs = {
            'debug': 'DBG',
            'info': 'INF',
            'warning': 'WRN',
            'error': 'ERR',
            'critical': 'CRT',
            'exception': 'EXC',
        }
        self.filtered_keys = {'logger', 'logger_name', 'function', 'file', 'line'}

    def __call__(self, logger, method_name, event_dict):
        timestamp = event_dict.pop('timestamp', '')
        level = event_dict.pop('level', 'info')
        event = event_dict.pop('event', '')

        # "2025-04-24 08:13:03" -> "04-24 08:13:03"
        if timestamp and len(timestamp) > 10:
            timestamp = timestamp[5:]

        level_str = f"[{self.level_abbrevs.get(level, level[:3].upper())}]"
        if self.colors:
            color = self.level_to_color.get(level, self.reset_color)
            level_str = f"{color}{level_str}{self.reset_color}"

        prefix = f"{timestamp} {level_str} "
        space_prefix = " " * (len(timestamp) + len(" [") + 3 + len("] "))
        lines = str(event).split('\n')
        final_lines = [f"{prefix}{lines[0]}"]
        final_lines.extend(f"{space_prefix}{line}" for line in lines[1:])

        extra = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items())
                         if key not in self.filtered_keys)
        if extra:
            final_lines.append(f"{space_prefix}{extra}")
        return "\n".join(final_lines)


message_store = MessageStore()
detail_filter = DetailLevelFilter()
prefix_filter = PrefixFilter()
global_renderer = CustomConsoleRenderer(colors=True)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        add_prefix,
        add_caller_info,
        detail_filter,
        prefix_filter,
        message_store,
        format_yaml_values,
        global_renderer,
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


class StructuredLogger:
    """Structured logger with debug detail levels and per-call prefixes."""

    def __init__(self, name, prefix=""):
        self.logger = structlog.get_logger(name)
        self.name = name
        self.prefix = prefix

    def _log(self, method, msg, detail_level=1, **kwargs):
        kwargs["_detail_level"] = detail_level
        kwargs["_prefix"] = self.prefix
        getattr(self.logger, method)(msg, **kwargs)

    def debug(self, msg, **kwargs):
        self._log("debug", msg, detail_level=1, **kwargs)

    def debug2(self, msg, **kwargs):
        self._log("debug", msg, detail_level=2, **kwargs)

    def debug3(self, msg, **kwargs):
        self._log("debug", msg, detail_level=3, **kwargs)

    def info(self, msg, **kwargs):
        self._log("info", msg, **kwargs)

    def warning(self, msg, **kwargs):
        self._log("warning", msg, **kwargs)

    def error(self, msg, **kwargs):
        self._log("error", msg, **kwargs)

    def critical(self, msg, **kwargs):
        self._log("critical", msg, **kwargs)

    def exception(self, msg, **kwargs):
        self._log("exception", msg, **kwargs)

    def set_allowed_prefixes(self, prefixes=None):
        """
        Set allowed prefixes for messages.
        None or an empty string enables all messages; a single string is one prefix.
        """
        if isinstance(prefixes, str):
            prefixes = [prefixes] if prefixes else None
        prefix_filter.set_allowed_prefixes(prefixes)

    def get_allowed_prefixes(self) -> Optional[List[str]]:
        return prefix_filter.get_allowed_prefixes()


def set_log_level(level_name: str, detail_level: int = None):
    """Set the root log level by name; 'debug2'/'debug3' also raise the detail level."""
    name = level_name.lower()
    if name in DETAIL_LEVELS:
        logging.getLogger().setLevel(logging.DEBUG)
        detail_filter.set_level(None, DETAIL_LEVELS[name] if detail_level is None else detail_level)
        return
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    logging.getLogger().setLevel(level)
    if detail_level is not None:
        detail_filter.set_level(None, detail_level)


def start_message_capture():
    message_store.start_capture()


def stop_message_capture():
    return message_store.stop_capture()


def get_stored_messages():
    return message_store.get_messages()


def clear_stored_messages():
    message_store.clear()
