# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module implements the compiler wrapper.

The wrapper is announced to the build system as the compiler. It records
the invocation into the compilation database, then replaces itself with the
real compiler. The compiler is only executed when the database was updated
successfully, otherwise the wrapper fails with an internal error. """

import logging
import os
import sys
from typing import Callable, List, Optional  # noqa: ignore=F401

from libcompdbhook import command_entry_point, reconfigure_logging
from libcompdbhook.config import from_environment, database_path
from libcompdbhook.database import CompilationDatabase

__all__ = ['comp_db_hook', 'make_arguments', 'exec_compiler']


def make_arguments(compiler, argv):
    # type: (str, List[str]) -> List[str]
    """ Creates the compiler invocation from the wrapper invocation.

    The wrapper name is replaced by the compiler name, the rest of the
    arguments are kept as they are. """

    return [compiler] + argv[1:]


def exec_compiler(compiler, arguments):
    # type: (str, List[str]) -> None
    """ Replaces the current process with the real compiler.

    The compiler does not get the wrapper invocation verbatim: `arguments`
    starts with the compiler name instead of the wrapper name, because the
    clang driver selects its mode (C or C++) from `argv[0]`.

    It returns only on failure, by raising `OSError`. """

    logging.debug('exec compiler: %s', arguments)
    for handler in logging.getLogger().handlers:
        handler.flush()
    os.execvp(compiler, arguments)


@command_entry_point
def comp_db_hook(argv=None, environment=None, replacer=exec_compiler):
    # type: (Optional[List[str]], Optional[dict], Callable[[str, List[str]], None]) -> int
    """ Entry point for the `comp-db-hook` compiler wrapper.

    :param argv:        the wrapper invocation (default: sys.argv)
    :param environment: the configuration source (default: os.environ)
    :param replacer:    executes the real compiler
    :return: exit code, only when the replacer returns. """

    config = from_environment(environment)
    reconfigure_logging(config.verbose)
    logging.debug('configuration: %s', config)

    arguments = make_arguments(config.compiler,
                               sys.argv if argv is None else argv)
    database = CompilationDatabase(database_path(config))
    database.update(arguments, config.workspace_dir)

    replacer(config.compiler, arguments)
    return 0
