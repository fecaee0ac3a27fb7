"""Common models used across dotsetup."""

from typing import Literal

from pydantic import BaseModel

from dotsetup.constants import APP_NAME, APP_VERSION


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = APP_VERSION
    environment: Literal["test", "dev", "prod"] = "prod"


class AppPaths(BaseModel):
    config_dir_name: str = APP_NAME
    data_dir_name: str = APP_NAME
    config_filename: str = "config.yaml"
    logs_dir_name: str = "logs"
