# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module collects the configuration of the hook.

The hook is invoked by the build system exactly as the compiler would be,
so it cannot take command line options of its own. The configuration is
read from environment variables once, at the entry point, and then passed
down explicitly. """

import collections
import logging
import os
from typing import Mapping, Optional  # noqa: ignore=F401

from libcompdbhook import join_path

__all__ = ['Configuration', 'from_environment', 'database_path']

COMPILER_KEY = 'COMP_DB_HOOK_COMPILER'
WORKSPACE_DIR_KEY = 'COMP_DB_HOOK_WORKSPACE_DIR'
DATABASE_KEY = 'COMP_DB_HOOK_DATABASE'
VERBOSE_KEY = 'COMP_DB_HOOK_VERBOSE'

DEFAULT_COMPILER = 'clang++'
DEFAULT_DATABASE_NAME = 'compile_commands.json'

Configuration = collections.namedtuple(
    'Configuration', ['compiler', 'workspace_dir', 'database', 'verbose'])


def from_environment(environment=None):
    # type: (Optional[Mapping[str, str]]) -> Configuration
    """ Creates the configuration from environment variables.

    Empty values are treated as unset. When the workspace directory is not
    given, the current working directory is used; failing to get that one
    raises `OSError`.

    :param environment: the variables to read from (default: os.environ)
    :return: a Configuration object. """

    environment = os.environ if environment is None else environment

    workspace_dir = environment.get(WORKSPACE_DIR_KEY) or os.getcwd()
    return Configuration(
        compiler=environment.get(COMPILER_KEY) or DEFAULT_COMPILER,
        workspace_dir=workspace_dir,
        database=environment.get(DATABASE_KEY) or None,
        verbose=_verbose_level(environment.get(VERBOSE_KEY)))


def database_path(config):
    # type: (Configuration) -> str
    """ Returns the path of the compilation database file. """

    if config.database:
        return config.database
    return join_path(config.workspace_dir, DEFAULT_DATABASE_NAME)


def _verbose_level(value):
    # type: (Optional[str]) -> int
    if not value:
        return 0
    try:
        return max(0, int(value))
    except ValueError:
        logging.warning('%s is not a number: %r', VERBOSE_KEY, value)
        return 0
