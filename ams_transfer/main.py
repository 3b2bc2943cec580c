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

"""
Entrypoint helpers: load configuration, install logging, build the context.
"""

import logging
from typing import Optional

from ams_transfer.application_context import ApplicationContext
from ams_transfer.common.config_loader import (
    get_loaded_config_file_path,
    get_loaded_env_file_path,
    load_configuration,
)
from ams_transfer.common.structures import Configuration
from ams_transfer.logs.log_setup import log_setup

logger = logging.getLogger(__name__)


def create_app_context(configuration: Optional[Configuration] = None) -> ApplicationContext:
    configuration = configuration or load_configuration()
    log_setup(
        service_name=configuration.app.name,
        log_level=configuration.app.log_level,
        json_output=configuration.app.log_json,
    )
    application_context = ApplicationContext(configuration)
    logger.info(
        "[MAIN] context created with .env=%s config=%s",
        get_loaded_env_file_path() or "<unset>",
        get_loaded_config_file_path() or "<unset>",
    )
    application_context._log_config_summary()
    return application_context
