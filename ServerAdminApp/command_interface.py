from abc import abstractmethod
from typing import List, Sequence
from .communication import ChatColor
from .config import Config, default_app_config
from .constants import Constants
from .messages import CommandMessages, LocalizedString, ResourceBundle
from .nondb_models.senders import CommandSender
from .structured_logger import StructuredLogger


class ServerCommand:
    """
    A named server command with aliases and an optional permission.

    execute() resolves the sender's messages and hands off to run_command(); the returned
    boolean says whether the use counted as a completed action.
    """

    def __init__(self, name: str, aliases: Sequence[str] = None, permission: str = None,
                 usage_key: str = None, config: Config = None):
        self.name = name
        self.aliases: List[str] = list(aliases or [])
        self.permission = permission
        self.usage_key = usage_key or f"{Constants.MESSAGE_PREFIX}.usage"
        self.config = config or default_app_config

    @property
    def labels(self) -> List[str]:
        return [self.name] + self.aliases

    def get_command_messages(self, sender: CommandSender) -> CommandMessages:
        locale = getattr(sender, "locale", None) or self.config.DEFAULT_LOCALE
        bundle = ResourceBundle.get_bundle(locale, self.config.MESSAGES_DIR)
        return CommandMessages(bundle)

    def execute(self, sender: CommandSender, label: str, args: Sequence[str]) -> bool:
        logger = StructuredLogger(__name__, prefix="ServerCommand.execute()> ")
        command_messages = self.get_command_messages(sender)
        args = ['' if arg is None else str(arg) for arg in args or []]
        success = self.run_command(sender, label, args, command_messages)
        logger.info(f"{sender.name} used /{label} {' '.join(args)}".rstrip()
                    + (" (counted)" if success else " (not counted)"))
        return success

    @abstractmethod
    def run_command(self, sender: CommandSender, label: str, args: List[str],
                    command_messages: CommandMessages) -> bool:
        raise NotImplementedError

    def tab_complete(self, sender: CommandSender, alias: str, args: Sequence[str]) -> List[str]:
        return []

    def test_permission_silent(self, sender: CommandSender) -> bool:
        if not self.permission:
            return True
        return sender.has_permission(self.permission)

    def test_permission(self, sender: CommandSender, permission_message: str) -> bool:
        logger = StructuredLogger(__name__, prefix="ServerCommand.test_permission()> ")
        if self.test_permission_silent(sender):
            return True
        logger.debug(f"{sender.name} lacks {self.permission} for /{self.name}")
        if permission_message:
            sender.send_message(f"{ChatColor.RED}{permission_message}")
        return False

    def send_usage_message(self, sender: CommandSender, command_messages: CommandMessages):
        bundle = command_messages.get_resource_bundle()
        usage = LocalizedString(self.usage_key, bundle).format(self.name)
        LocalizedString(f"{Constants.MESSAGE_PREFIX}.command.usage", bundle) \
            .send_in_color(ChatColor.RED, sender, usage)

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name}, aliases={self.aliases})"
