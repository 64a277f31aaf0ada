"""
Module loggers

`getLogger(name, config)` configures a logger once from the module config:
LOG_LEVEL, LOG_OUTPUT, LOG_FORMATTER, LOG_DATEFMT and LOG_COLORED.
"""
import logging
import sys

from typing import List, Optional

import coloredlogs

from xmlform.conf import ModuleConfig, default_config, getConfig


FILE_OUTPUT_PREFIX = "file://"


def getLoggerHandler(output: Optional[str] = None) -> logging.Handler:
    if output is None or output == "stderr":
        return logging.StreamHandler(sys.stderr)

    if output == "stdout":
        return logging.StreamHandler(sys.stdout)

    if output.startswith(FILE_OUTPUT_PREFIX):
        return logging.FileHandler(output[len(FILE_OUTPUT_PREFIX):])

    raise ValueError(f"Unsupported log output [{output}]")


def __closure__():
    XMLFORM_LOGGERS = dict()

    def setupLogger(module_name: Optional[str], log_config: ModuleConfig) -> logging.Logger:
        module_logger = logging.getLogger(module_name)

        level = getattr(logging, str(log_config.LOG_LEVEL).upper(), None)
        if not isinstance(level, int):
            level = logging.NOTSET
        module_logger.setLevel(level)

        outputs = log_config.LOG_OUTPUT
        if not isinstance(outputs, (list, tuple)):
            outputs = (outputs, )

        log_handlers: List[logging.Handler] = [getLoggerHandler(output) for output in outputs if output]
        for handler in log_handlers:
            handler.setFormatter(logging.Formatter(log_config.LOG_FORMATTER, log_config.LOG_DATEFMT))

        if log_config.LOG_COLORED:
            coloredlogs.install(
                fmt=log_config.LOG_FORMATTER,
                datefmt=log_config.LOG_DATEFMT,
                level=level,
                logger=module_logger
            )

        # The root logger is configured through basicConfig
        if module_name is None:
            logging.basicConfig(handlers=log_handlers)
        else:
            for handler in log_handlers:
                module_logger.addHandler(handler)

        XMLFORM_LOGGERS[module_name] = module_logger
        return module_logger

    def getLogger(module_name: Optional[str], log_config: Optional[ModuleConfig] = None) -> logging.Logger:
        if module_name in XMLFORM_LOGGERS:
            return XMLFORM_LOGGERS[module_name]

        return setupLogger(module_name, log_config or getConfig(module_name))

    setupLogger(None, default_config)
    return getLogger


getLogger = __closure__()
