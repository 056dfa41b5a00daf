from typing import Callable, Dict, List, Sequence
from .command_interface import ServerCommand
from .config import Config, default_app_config
from .messages import CommandMessages
from .nondb_models.senders import CommandSender, Player
from .server_interface import ServerInterface
from .structured_logger import StructuredLogger
from .subcommands import SUBCOMMAND_COLLATOR, SUBCOMMANDS, Subcommand, resolve
from .utility import copy_partial_matches

Completer = Callable[[CommandSender, str], List[str]]


def no_suggestions(sender: CommandSender, token: str) -> List[str]:
    return []


def complete_world_name(sender: CommandSender, token: str) -> List[str]:
    if not isinstance(sender, Player):
        return []
    world_names = ServerInterface.get_instance().get_world_names()
    return copy_partial_matches(token, world_names, SUBCOMMAND_COLLATOR)


def complete_property_key(sender: CommandSender, token: str) -> List[str]:
    keys = ServerInterface.get_instance().get_system_properties().keys()
    return copy_partial_matches(token, keys, SUBCOMMAND_COLLATOR)


# completion of the argument after the subcommand name; every subcommand has an entry
SECOND_ARGUMENT_COMPLETERS: Dict[Subcommand, Completer] = {
    Subcommand.ABOUT: no_suggestions,
    Subcommand.CHUNK: no_suggestions,
    Subcommand.EVAL: no_suggestions,
    Subcommand.HELP: no_suggestions,
    Subcommand.PROPERTY: complete_property_key,
    Subcommand.VM: no_suggestions,
    Subcommand.WORLD: complete_world_name,
    Subcommand.WORLDS: no_suggestions,
}


class ServerAdminCommand(ServerCommand):
    """The /server command: about, chunk, eval, help, property, vm, world and worlds."""

    def __init__(self, config: Config = None):
        config = config or default_app_config
        super().__init__(config.COMMAND_NAME, config.COMMAND_ALIASES, config.PERMISSION, config=config)

    def run_command(self, sender: CommandSender, label: str, args: List[str],
                    command_messages: CommandMessages) -> bool:
        logger = StructuredLogger(__name__, prefix="ServerAdminCommand.run_command()> ")
        if not self.test_permission(sender, command_messages.get_permission_message()):
            logger.debug2(f"denied: {sender.name} /{label}")
            return True
        subcommand = resolve(args[0]) if len(args) >= 1 else None
        if subcommand is None:
            logger.debug2(f"unresolved: {sender.name} /{label} {args[0] if args else ''}")
            self.send_usage_message(sender, command_messages)
            return False
        logger.debug2(f"handled: {sender.name} /{label} {subcommand.lower_case_name}")
        return subcommand.execute(sender, label, args, command_messages)

    def tab_complete(self, sender: CommandSender, alias: str, args: Sequence[str]) -> List[str]:
        if sender is None or alias is None or args is None:
            return []
        if any(not isinstance(arg, str) for arg in args):
            return []
        if len(args) == 1:
            return copy_partial_matches(args[0], SUBCOMMANDS, SUBCOMMAND_COLLATOR)
        if len(args) == 2:
            subcommand = resolve(args[0])
            if subcommand is None:
                return []
            return SECOND_ARGUMENT_COMPLETERS.get(subcommand, no_suggestions)(sender, args[1])
        return []
