from typing import ClassVar


class Constants:
    MESSAGE_PREFIX: ClassVar[str] = 'server'
    SUBCOMMAND_KEY_PREFIX: ClassVar[str] = 'server.subcommand'
    # subcommand names are matched with this locale's case folding
    SUBCOMMAND_LOCALE: ClassVar[str] = 'en'
    DEFAULT_LOCALE: ClassVar[str] = 'en'
    MESSAGES_FILE_PATTERN: ClassVar[str] = 'messages_{locale}.yaml'
    CHUNK_SIZE: ClassVar[int] = 16
    API_VERSION: ClassVar[str] = '1.0'
