# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module is responsible for the compilation database entries and for
merging a compiler invocation into them. """

import collections
import json
import logging
from typing import Any, Dict, List, Optional, Set  # noqa: ignore=F401

from libcompdbhook import join_path

__all__ = ['SourceFile', 'CommandEntry', 'current_files', 'update_entries']

# Compiler options which take the following argument as their value. The
# value is skipped together with the option, even if it looks like a file.
FLAGS_WITH_ARGUMENT = frozenset({
    '-MF',
    '-include',
    '-iquote',
    '-isystem',
    '-o',
    '-target',
})

FLAG_PREFIX = '-'


class SourceFile:
    """ Represents a source file named by a compiler invocation.

    Source files are compared by their absolute path, the relative path is
    kept to be written into new entries as it was given. """

    def __init__(self, base_directory, relative_path):
        # type: (str, str) -> None
        self.relative_path = relative_path
        self.absolute_path = join_path(base_directory, relative_path)

    def __hash__(self):
        # type: () -> int
        return hash(self.absolute_path)

    def __eq__(self, other):
        # type: (object) -> bool
        if not isinstance(other, SourceFile):
            return NotImplemented
        return self.absolute_path == other.absolute_path

    def __lt__(self, other):
        # type: (SourceFile) -> bool
        return self.absolute_path < other.absolute_path

    def __repr__(self):
        # type: () -> str
        return 'SourceFile({0!r})'.format(self.absolute_path)


class CommandEntry:
    """ Represents a compilation database entry.

    None of the fields are optional in the format, but a damaged entry shall
    not fail the entire run. Missing fields are represented as None. """

    FIELDS = ('directory', 'arguments', 'file')

    def __init__(self, directory=None, arguments=None, file=None):
        # type: (Optional[str], Optional[List[str]], Optional[str]) -> None
        self.directory = directory
        self.arguments = arguments
        self.file = file

    def __eq__(self, other):
        # type: (object) -> bool
        if not isinstance(other, CommandEntry):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        # type: () -> str
        return 'CommandEntry(directory={0!r}, arguments={1!r}, file={2!r})'\
            .format(self.directory, self.arguments, self.file)

    def to_json(self):
        # type: () -> Dict[str, Any]
        """ Creates the JSON object of the entry, keeping the field order. """

        result = collections.OrderedDict()  # type: Dict[str, Any]
        for key in self.FIELDS:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result

    @classmethod
    def from_json(cls, entry):
        # type: (Any) -> CommandEntry
        """ Parser method for compilation database entry.

        Absent fields are tolerated, but a field with the wrong type is not.

        :param entry:   the decoded JSON object
        :return: a CommandEntry object
        :raises ValueError: when the entry does not have the expected shape """

        if not isinstance(entry, dict):
            raise ValueError('entry is not an object: {0!r}'.format(entry))

        directory = entry.get('directory')
        if directory is not None and not isinstance(directory, str):
            raise ValueError('directory is not a string: {0!r}'
                             .format(directory))
        file = entry.get('file')
        if file is not None and not isinstance(file, str):
            raise ValueError('file is not a string: {0!r}'.format(file))
        arguments = entry.get('arguments')
        if arguments is not None and not (
                isinstance(arguments, list) and
                all(isinstance(arg, str) for arg in arguments)):
            raise ValueError('arguments is not a list of strings: {0!r}'
                             .format(arguments))

        return cls(directory=directory, arguments=arguments, file=file)


def current_files(cwd, arguments):
    # type: (str, List[str]) -> Set[SourceFile]
    """ Collects the source files from a compiler invocation.

    Every argument which is not an option, nor the value of an option, is
    taken as a source file.

    :param cwd:         the directory the relative paths are resolved from
    :param arguments:   the compiler invocation (the compiler name first)
    :return: the set of source files """

    files = set()  # type: Set[SourceFile]
    args = iter(arguments[1:])
    for arg in args:
        if arg in FLAGS_WITH_ARGUMENT:
            next(args, None)
        elif not arg.startswith(FLAG_PREFIX):
            files.add(SourceFile(cwd, arg))
    return files


def update_entries(arguments, cwd, entries):
    # type: (List[str], str, List[CommandEntry]) -> None
    """ Merges the current compiler invocation into the existing entries.

    Entries of the source files in the current invocation get the new
    arguments, while keeping their position. Source files without entry are
    appended. Every other entry is left as it was, stale entries are never
    removed.

    :param arguments:   the compiler invocation (the compiler name first)
    :param cwd:         the workspace directory
    :param entries:     the entries to update in place """

    files = current_files(cwd, arguments)
    logging.debug('source files in the invocation: %s', sorted(files))

    for entry in entries:
        if entry.file is None:
            logging.error('compilation database contains an entry without '
                          'a `file` field:\n%s',
                          json.dumps(entry.to_json(), indent=4))
            continue
        base_directory = cwd if entry.directory is None else entry.directory
        source = SourceFile(base_directory, entry.file)
        if source in files:
            files.remove(source)
            entry.arguments = list(arguments)
            logging.debug('entry updated: %s', source.absolute_path)

    for source in sorted(files):
        entries.append(CommandEntry(directory=cwd,
                                    arguments=list(arguments),
                                    file=source.relative_path))
        logging.debug('entry added: %s', source.absolute_path)
