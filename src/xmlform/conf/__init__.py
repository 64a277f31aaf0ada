"""
Module configuration

Each module reads its settings from the section named after it in the
configuration files listed by XMLFORM_CONFIG_FILE (`|` separated, missing
files are skipped), then from the defaults it was set up with, then from
`sysdefaults`:

    [xmlform.builder]
    DB_DSN = postgresql://localhost/forms
"""
import configparser
import json
import os
import re

from types import ModuleType
from typing import Any, Dict, Union

from . import sysdefaults


XMLFORM_CONFIG_FILES = os.environ.get("XMLFORM_CONFIG_FILE", "base.ini|config.ini").split('|')
SYSTEM_DEFAULTS_KEY = "sysdefaults"
RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")


def __module_config__():
    __parser__ = configparser.ConfigParser()
    __parser__.optionxform = lambda s: RX_INVALID_OPTION.sub("_", s.strip()).upper()
    __parser__.read(XMLFORM_CONFIG_FILES)

    __config__: Dict[str, "ModuleConfig"] = {}

    def read_option(section: str, key: str, default: Any) -> Any:
        ''' The file value of `key`, coerced to the type of its default. '''
        if not __parser__.has_option(section, key):
            return default

        # NOTE: bool is a subclass of int
        if isinstance(default, bool):
            return __parser__.getboolean(section, key)
        if isinstance(default, int):
            return __parser__.getint(section, key)
        if isinstance(default, float):
            return __parser__.getfloat(section, key)
        if isinstance(default, (dict, list, tuple)):
            return json.loads(__parser__.get(section, key))

        return __parser__.get(section, key)

    class ModuleConfig(object):
        def __init__(self, module_name: str, *defaults):
            if module_name in __config__:
                raise RuntimeError(f"Module [{module_name}] already configured.")

            values: Dict[str, Any] = {}
            for conf in defaults + (sysdefaults,):
                entries = conf.items() if isinstance(conf, ModuleConfig) else vars(conf).items()
                for key, default in entries:
                    if key.isupper() and key not in values:
                        values[key] = read_option(module_name, key, default)

            self.__name__ = module_name
            self.__values__ = values

        def __getattr__(self, name):
            try:
                return self.__values__[name]
            except KeyError:
                raise AttributeError(f"Config [{self.__name__}] has no value [{name}]") from None

        def __getitem__(self, name):
            return self.__values__[name]

        def get(self, name, default=None):
            return self.__values__.get(name, default)

        def items(self):
            return self.__values__.items()

    def get_config(config_key: str, *defaults: Union[ModuleType, ModuleConfig]) -> ModuleConfig:
        if config_key not in __config__:
            __config__[config_key] = ModuleConfig(config_key, *defaults)

        return __config__[config_key]

    return ModuleConfig, get_config, get_config(SYSTEM_DEFAULTS_KEY, sysdefaults)


ModuleConfig, getConfig, default_config = __module_config__()
