"""Common models used across treeconf."""

from typing import Literal

from pydantic import BaseModel

from treeconf.constants import APP_NAME


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "dev"


class AppPaths(BaseModel):
    data_dir_name: str = APP_NAME
    logs_dir_name: str = "logs"
    log_filename: str = f"{APP_NAME}.log"
