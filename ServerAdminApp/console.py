import argparse
import sys
from typing import List, Optional
from .admin_command import ServerAdminCommand
from .command_handler import CommandHandler
from .communication import Connection, translate_to_ansi
from .config import Config, ConfigError, default_app_config
from .local_server import LocalServer
from .nondb_models.senders import CommandSender, ConsoleCommandSender, Player
from .nondb_models.world import World
from .server_interface import ServerInterface
from .structured_logger import StructuredLogger

try:
    import readline
except ImportError:  # Windows without pyreadline
    readline = None


class Console:
    """Line-oriented console that feeds typed commands to a CommandHandler."""

    prompt = "> "

    def __init__(self, command_handler: CommandHandler, sender: CommandSender):
        self.command_handler = command_handler
        self.sender = sender
        self._matches: List[str] = []

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer: candidates for the word under the cursor."""
        if state == 0:
            line = readline.get_line_buffer()[:readline.get_endidx()]
            self._matches = self.command_handler.complete_line(self.sender, line)
        if state < len(self._matches):
            return self._matches[state]
        return None

    def install_completer(self):
        if readline is None:
            return
        readline.set_completer(self.complete)
        readline.set_completer_delims(" \t")
        doc = getattr(readline, '__doc__', '') or ''
        if 'libedit' in doc:
            readline.parse_and_bind('bind ^I rl_complete')
        else:
            readline.parse_and_bind('tab: complete')

    def run(self):
        logger = StructuredLogger(__name__, prefix="Console.run()> ")
        self.install_completer()
        while True:
            try:
                line = input(self.prompt)
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if line.strip().lower() in ("exit", "quit", "stop"):
                break
            try:
                self.command_handler.process_command(self.sender, line)
            except Exception:
                logger.exception(f"error handling '{line}'")


def build_server(config: Config) -> LocalServer:
    return LocalServer(worlds=[World(name) for name in config.WORLDS])


def main(argv: List[str] = None):
    parser = argparse.ArgumentParser(description="Interactive server administration console")
    parser.add_argument("--config", "-c", help="Path to a YAML config file")
    parser.add_argument("--player", "-p", help="Act as a player with this name instead of the console")
    args = parser.parse_args(argv)

    config = default_app_config
    try:
        if args.config:
            config.load_from_yaml(args.config)
        config.validate()
        config.apply_logging()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    server = build_server(config)
    ServerInterface.set_instance(server)

    if args.player:
        worlds = server.get_worlds()
        location = worlds[0].spawn_location if worlds else None
        connection = Connection(lambda text: print(translate_to_ansi(text)), name=args.player)
        sender = Player(args.player, location=location, connection=connection, is_op=True)
        server.add_player(sender)
    else:
        sender = ConsoleCommandSender()

    command_handler = CommandHandler()
    command_handler.register(ServerAdminCommand(config))
    Console(command_handler, sender).run()


if __name__ == "__main__":
    main()
