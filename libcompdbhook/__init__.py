# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is a collection of methods commonly used in this project. """
import functools
import logging
import os
import os.path
import sys

from typing import Callable  # noqa: ignore=F401

__all__ = ['join_path', 'reconfigure_logging', 'command_entry_point']

INTERNAL_ERROR_EXIT_CODE = 64


def join_path(base_directory, file_name):
    # type: (str, str) -> str
    """ Resolves a file name against a base directory.

    Pure string operation, the file system is not consulted and the result
    is not normalized.

    :param base_directory: the directory to resolve against (might be empty)
    :param file_name: the file name as it was given
    :return: the file name when it's already absolute or there is no base
    directory, the two joined by exactly one separator otherwise. """

    if not base_directory or file_name.startswith('/'):
        return file_name
    elif base_directory.endswith('/'):
        return base_directory + file_name
    return base_directory + '/' + file_name


def reconfigure_logging(verbose_level):
    """ Reconfigure logging level and format based on the verbose flag.

    :param verbose_level: the requested verbosity (like number of `-v` flags)
    :return: no return value
    """
    # exit when nothing to do
    if verbose_level <= 0:
        return

    root = logging.getLogger()
    # tune level
    level = logging.WARNING - min(logging.WARNING, (10 * verbose_level))
    root.setLevel(level)
    # be verbose with messages
    if verbose_level <= 3:
        fmt_string = '%(name)s: %(levelname)s: %(message)s'
    else:
        fmt_string = '%(name)s: %(levelname)s: %(funcName)s: %(message)s'
    # stdout belongs to the compiler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt_string))
    root.handlers = [handler]


def command_entry_point(function):
    # type: (Callable[..., int]) -> Callable[..., int]
    """ Decorator for command entry methods.

    The decorator initialize/shutdown logging and guard on environment
    errors (catch exceptions).

    The decorated method can have arbitrary parameters, the return value will
    be the exit code of the process. """

    @functools.wraps(function)
    def wrapper(*args, **kwargs):
        # type: (...) -> int
        """ Do housekeeping tasks and execute the wrapped method. """

        try:
            logging.basicConfig(format='%(name)s: %(message)s',
                                level=logging.WARNING,
                                stream=sys.stderr)
            # this hack to get the executable name as %(name)
            logging.getLogger().name = os.path.basename(sys.argv[0])
            return function(*args, **kwargs)
        except KeyboardInterrupt:
            logging.warning('Keyboard interrupt')
            return 130  # signal received exit code for bash
        except OSError:
            logging.exception('Internal error.')
            if not logging.getLogger().isEnabledFor(logging.DEBUG):
                logging.error("Please run this command again and turn on "
                              "verbose mode (set COMP_DB_HOOK_VERBOSE=4).")
            return INTERNAL_ERROR_EXIT_CODE
        finally:
            logging.shutdown()

    return wrapper
