# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ams_transfer.common.error import AmsConfigurationError
from ams_transfer.common.structures import Configuration

logger = logging.getLogger(__name__)

LOG_PREFIX = "[AMS][CONFIG]"

_loaded_env_file: Optional[str] = None
_loaded_config_file: Optional[str] = None


def get_loaded_env_file_path() -> Optional[str]:
    return _loaded_env_file


def get_loaded_config_file_path() -> Optional[str]:
    return _loaded_config_file


def load_environment(dotenv_path: Optional[str] = None) -> None:
    global _loaded_env_file
    dotenv_path = dotenv_path or os.environ.get("ENV_FILE", "./config/.env")
    if load_dotenv(dotenv_path):
        _loaded_env_file = dotenv_path
        logger.info("%s Loaded environment variables from: %s", LOG_PREFIX, dotenv_path)
    else:
        logger.warning("%s No .env file found at: %s", LOG_PREFIX, dotenv_path)


def parse_configuration(config_file: str) -> Configuration:
    path = Path(config_file)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise AmsConfigurationError(f"cannot read {config_file}: {e}") from e
    except yaml.YAMLError as e:
        raise AmsConfigurationError(f"{config_file} is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise AmsConfigurationError(f"{config_file} must hold a mapping at top level")
    try:
        return Configuration.model_validate(raw)
    except ValidationError as e:
        raise AmsConfigurationError(f"{config_file}: {e}") from e


def load_configuration() -> Configuration:
    global _loaded_config_file
    load_environment()
    config_file = os.environ.get("CONFIG_FILE", "./config/configuration.yaml")
    configuration = parse_configuration(config_file)
    _loaded_config_file = config_file
    logger.info("%s Loaded configuration from: %s", LOG_PREFIX, config_file)
    return configuration
