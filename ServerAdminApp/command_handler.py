from typing import Dict, List, Optional
from .command_interface import ServerCommand
from .communication import ChatColor
from .nondb_models.senders import CommandSender
from .structured_logger import StructuredLogger
from .utility import copy_partial_matches, split_preserving_quotes


class CommandHandler:
    """Maps command labels (names and aliases) to commands and routes input lines to them."""

    def __init__(self):
        self.command_handlers: Dict[str, ServerCommand] = {}

    def register(self, command: ServerCommand):
        logger = StructuredLogger(__name__, prefix="CommandHandler.register()> ")
        for label in command.labels:
            key = label.lower()
            if key in self.command_handlers and self.command_handlers[key] is not command:
                raise ValueError(f"Label '{label}' is already registered to {self.command_handlers[key]}")
            self.command_handlers[key] = command
        logger.debug(f"registered {command} as {', '.join(command.labels)}")

    def get_command(self, label: str) -> Optional[ServerCommand]:
        return self.command_handlers.get(label.lower())

    @property
    def labels(self) -> List[str]:
        return list(self.command_handlers.keys())

    def process_command(self, sender: CommandSender, input: str) -> Optional[bool]:
        """
        Run one input line for sender.

        Returns:
            the command's success flag, or None if the line was empty or named no command
        """
        logger = StructuredLogger(__name__, prefix="process_command()> ")
        line = input.strip()
        if line.startswith('/'):
            line = line[1:]
        parts = split_preserving_quotes(line)
        if not parts:
            return None
        label, args = parts[0], parts[1:]
        command = self.get_command(label)
        if command is None:
            logger.debug(f"{sender.name} typed unknown command {label}")
            sender.send_message(f"{ChatColor.RED}Unknown command '{label}'.")
            return None
        return command.execute(sender, label, args)

    def complete_line(self, sender: CommandSender, input: str) -> List[str]:
        """Completion candidates for the last word of a partially typed line."""
        line = input.lstrip()
        if line.startswith('/'):
            line = line[1:]
        parts = split_preserving_quotes(line)
        if line == '' or line[-1].isspace():
            parts.append('')
        if len(parts) <= 1:
            return copy_partial_matches(parts[0] if parts else '', self.labels)
        command = self.get_command(parts[0])
        if command is None:
            return []
        return command.tab_complete(sender, parts[0], parts[1:])
