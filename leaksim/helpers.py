# Copyright (c) 2023 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Internal helper functions used within leaksim to streamline the package."""

import logging
import coloredlogs


### Instantiate default logger upon import of this file so that it is always configured ###
# Instantiate the logger with default settings
logger = logging.getLogger("leaksim")
# Log output handlers can have their own logging levels, internal logger will collect all levels
logger.setLevel(logging.DEBUG)

# Change a few colours for the logging output, making message times appear in a mid-blue and the logger name in green
custom_field_styles = dict(coloredlogs.DEFAULT_FIELD_STYLES)
custom_field_styles['asctime'] = {'color': 24}
custom_field_styles['name'] = {'color': 22}
custom_level_styles = dict(coloredlogs.DEFAULT_LEVEL_STYLES)
custom_level_styles['info'] = {'color': 'white'}
# Install one default colourized stream handler set to level INFO; no log files by default
coloredlogs.install(level='INFO', logger=logger, fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                    level_styles=custom_level_styles, field_styles=custom_field_styles)


def configure_logger(logging_level: int = None,
                     file_handler: logging.FileHandler = None, stream_handler: logging.StreamHandler = None):
    """
    Configure the leaksim logger based on the user's preference.

    Parameters
    ----------
    logging_level: int, optional
        The global logging level to set for the logger. If provided, the logger's level will be set to this
        value. Default is None.
    file_handler: logging.FileHandler, optional
        A custom file handler to be added to the logger. If provided, the existing file handler (if any) is
        removed and the custom one is added. Default is None.
    stream_handler: logging.StreamHandler, optional
        A custom stream handler to be added to the logger. If provided, the default stream handler (if any) is
        removed and the custom one is added. Default is None.

    Notes
    -----
    This function assumes that the logger has one stream and one file handler maximum.

    Example
    -------
    # Silence the per-model generation messages while still reporting warnings
    configure_logger(logging_level=logging.WARNING)
    """
    pkg_logger = logging.getLogger('leaksim')
    if logging_level:
        pkg_logger.setLevel(logging_level)

    # Identify any existing logging output handlers based on their types
    existing_stream_handler = None
    existing_file_handler = None
    for handler in pkg_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            existing_file_handler = handler
        elif isinstance(handler, logging.StreamHandler):
            existing_stream_handler = handler

    if stream_handler:
        if existing_stream_handler:
            pkg_logger.removeHandler(existing_stream_handler)
        pkg_logger.addHandler(stream_handler)
    if file_handler:
        if existing_file_handler:
            pkg_logger.removeHandler(existing_file_handler)
        pkg_logger.addHandler(file_handler)
