APP_NAME = "dotsetup"
APP_VERSION = "1.0.0"
ENV_PREFIX = "DOTSETUP_CONFIG__"
