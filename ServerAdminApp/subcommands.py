"""
The fixed catalog of server subcommands.

Subcommand members are declared in help order. Each value holds the behavior callable
``(sender, label, args, command_messages) -> bool``; args[0] is the subcommand name as
typed. SUBCOMMANDS lists the lowercase display names in declaration order and
SUBCOMMAND_MAP indexes the members by collation key.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from .basic_types import GenericEnumWithAttributes
from .collation import CaseInsensitiveCollator
from .communication import ChatColor
from .constants import Constants
from .expression_evaluator import EvaluationError, ExpressionEvaluator
from .messages import CommandMessages, LocalizedString, ResourceBundle
from .nondb_models.senders import CommandSender, Entity, Player
from .server_interface import ServerInterface
from .structured_logger import StructuredLogger
from .utility import get_location, is_physical

Behavior = Callable[[CommandSender, str, List[str], CommandMessages], bool]


@dataclass(frozen=True)
class SubcommandSpec:
    behavior: Behavior


def _send_bullet(sender: CommandSender, template: LocalizedString, bundle: ResourceBundle,
                 key: str, value):
    template.send(sender, LocalizedString(key, bundle), value)


def _about(sender, label, args, command_messages) -> bool:
    bundle = command_messages.get_resource_bundle()
    server = ServerInterface.get_instance()
    LocalizedString("server.about", bundle).send(sender)
    template = LocalizedString("server.about._template", bundle)
    _send_bullet(sender, template, bundle, "server.about.brand", server.get_name())
    _send_bullet(sender, template, bundle, "server.about.name", server.get_server_name())
    _send_bullet(sender, template, bundle, "server.about.version", server.get_version())
    _send_bullet(sender, template, bundle, "server.about.api-version", server.get_api_version())
    _send_bullet(sender, template, bundle, "server.about.players", len(server.get_online_players()))
    _send_bullet(sender, template, bundle, "server.about.worlds", len(server.get_worlds()))
    _send_bullet(sender, template, bundle, "server.about.plugins", len(server.get_plugins()))
    _send_bullet(sender, template, bundle, "server.about.threads", server.get_thread_count())
    return False


def _chunk(sender, label, args, command_messages) -> bool:
    if not is_physical(sender):
        command_messages.get_not_physical().send_in_color(ChatColor.RED, sender)
        return False
    chunk_x, chunk_z = get_location(sender).get_chunk()
    LocalizedString("server.chunk", command_messages.get_resource_bundle()).send(sender, chunk_x, chunk_z)
    return True


def _eval(sender, label, args, command_messages) -> bool:
    logger = StructuredLogger(__name__, prefix="_eval()> ")
    bundle = command_messages.get_resource_bundle()
    if len(args) == 1:
        Subcommand.EVAL.send_help(sender, label, bundle)
        return False
    expression = ' '.join(args[1:])
    server = ServerInterface.get_instance()
    target = sender if isinstance(sender, Entity) else server
    try:
        result = ExpressionEvaluator(expression, target, sender=sender, server=server).process()
    except EvaluationError as e:
        logger.debug(f"{sender.name} failed to evaluate '{expression}': {e}")
        LocalizedString("server.eval.error", bundle).send_in_color(ChatColor.RED, sender, e)
        return False
    if result is None:
        LocalizedString("server.eval.null", bundle).send(sender)
    else:
        LocalizedString("server.eval", bundle).send(sender, result)
    return True


def _help(sender, label, args, command_messages) -> bool:
    for subcommand in Subcommand:
        subcommand.send_help(sender, label, command_messages.get_resource_bundle())
    return False


def _property(sender, label, args, command_messages) -> bool:
    bundle = command_messages.get_resource_bundle()
    server = ServerInterface.get_instance()
    if len(args) == 1:
        template = LocalizedString("server.property", bundle)
        for key, value in server.get_system_properties().items():
            template.send(sender, key, value)
    else:
        key = args[1].lower()
        value = server.get_system_property(key)
        if value is None:
            LocalizedString("server.property.invalid", bundle).send_in_color(ChatColor.RED, sender, key)
        else:
            LocalizedString("server.property", bundle).send(sender, key, value)
    return False


def _vm(sender, label, args, command_messages) -> bool:
    bundle = command_messages.get_resource_bundle()
    arguments = ServerInterface.get_instance().get_vm_arguments()
    if not arguments:
        LocalizedString("server.vm.empty", bundle).send(sender)
    else:
        LocalizedString("server.vm", bundle).send(sender, len(arguments))
        for argument in arguments:
            sender.send_message(f" - '{ChatColor.AQUA}{argument}{ChatColor.RESET}'.")
    return False


def _world(sender, label, args, command_messages) -> bool:
    bundle = command_messages.get_resource_bundle()
    server = ServerInterface.get_instance()
    if len(args) == 1:
        LocalizedString("server.worlds", bundle).send(
            sender, command_messages.join_list(server.get_world_names()))
        return True
    if not isinstance(sender, Player):
        LocalizedString("server.world.not-player", bundle).send_in_color(ChatColor.RED, sender)
        return False
    world_name = args[1]
    world = server.get_world(world_name)
    if world is None:
        LocalizedString("server.world.invalid", bundle).send_in_color(ChatColor.RED, sender, world_name)
        return False
    sender.teleport(world.spawn_location)
    LocalizedString("server.world.done", bundle).send(sender, world.name)
    return True


def _worlds(sender, label, args, command_messages) -> bool:
    return Subcommand.WORLD.execute(sender, label, args, command_messages)


class Subcommand(GenericEnumWithAttributes):
    ABOUT = SubcommandSpec(_about)
    CHUNK = SubcommandSpec(_chunk)
    EVAL = SubcommandSpec(_eval)
    HELP = SubcommandSpec(_help)
    PROPERTY = SubcommandSpec(_property)
    VM = SubcommandSpec(_vm)
    WORLD = SubcommandSpec(_world)
    # alias for WORLD
    WORLDS = SubcommandSpec(_worlds)

    @property
    def lower_case_name(self) -> str:
        return self.name.lower()

    @property
    def usage_key(self) -> str:
        return f"{Constants.SUBCOMMAND_KEY_PREFIX}.{self.lower_case_name}.usage"

    @property
    def description_key(self) -> str:
        return f"{Constants.SUBCOMMAND_KEY_PREFIX}.{self.lower_case_name}.description"

    def help_line(self, label: str, resource_bundle: ResourceBundle) -> str:
        return (f"- {ChatColor.GOLD}/{label} "
                f"{ChatColor.AQUA}{LocalizedString(self.usage_key, resource_bundle).get()}"
                f"{ChatColor.GRAY}: {LocalizedString(self.description_key, resource_bundle).get()}")

    def send_help(self, sender: CommandSender, label: str, resource_bundle: ResourceBundle):
        sender.send_message(self.help_line(label, resource_bundle))

    def execute(self, sender: CommandSender, label: str, args: List[str],
                command_messages: CommandMessages) -> bool:
        return self.behavior(sender, label, args, command_messages)


def _build_index(collator: CaseInsensitiveCollator) -> Dict[str, Subcommand]:
    index = {}
    for subcommand in sorted(Subcommand, key=lambda s: collator.key(s.name)):
        key = collator.key(subcommand.name)
        if key in index:
            raise ValueError(f"Subcommand names {index[key].name} and {subcommand.name} "
                             f"collide under {collator.locale} collation")
        index[key] = subcommand
    return index


SUBCOMMAND_COLLATOR = CaseInsensitiveCollator(Constants.SUBCOMMAND_LOCALE)
SUBCOMMANDS: List[str] = [subcommand.lower_case_name for subcommand in Subcommand]
SUBCOMMAND_MAP: Dict[str, Subcommand] = _build_index(SUBCOMMAND_COLLATOR)


def resolve(token: Optional[str]) -> Optional[Subcommand]:
    if not isinstance(token, str):
        return None
    return SUBCOMMAND_MAP.get(SUBCOMMAND_COLLATOR.key(token))
