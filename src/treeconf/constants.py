APP_NAME = "treeconf"
ENV_PREFIX = "TREECONF_"

DEFAULT_FILENAME = "config"
DEFAULT_EXTNAME = ".yml"
DEFAULT_KEY_DELIMITER = "."

# Search order when locating a configuration file inside a directory.
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml", ".json", ".toml")
