# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.
""" This module implements the compilation database persistence.

The database file is shared by all compiler invocations of a (possibly
parallel) build. Every update is done under an exclusive advisory lock on
the file: the content is read, merged with the current invocation and
written back from scratch before the lock is released. """

import contextlib
import fcntl
import json
import logging
import os
from typing import Iterator, List  # noqa: ignore=F401

from libcompdbhook.compilation import CommandEntry, update_entries

__all__ = ['CompilationDatabase', 'exclusive_lock']

READ_BUFFER_SIZE = 4096


@contextlib.contextmanager
def exclusive_lock(fd):
    # type: (int) -> Iterator[None]
    """ Holds an exclusive advisory lock on the given file descriptor.

    Acquiring blocks until the lock is available. It is released when the
    context exits, with or without an exception. """

    logging.debug('acquire lock on fd %d', fd)
    fcntl.flock(fd, fcntl.LOCK_EX)
    try:
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)
        logging.debug('lock released on fd %d', fd)


class CompilationDatabase:
    """ Compilation database persistence methods. """

    def __init__(self, filename):
        # type: (str) -> None
        self.filename = filename

    def update(self, arguments, cwd):
        # type: (List[str], str) -> List[CommandEntry]
        """ Records the compiler invocation into the database file.

        :param arguments:   the compiler invocation (the compiler name first)
        :param cwd:         the workspace directory
        :return: the entries as they were written. """

        fd = self.open()
        try:
            with exclusive_lock(fd):
                entries = self.parse(self.read_all(fd))
                update_entries(arguments, cwd, entries)
                self.rewrite(fd, entries)
                return entries
        finally:
            os.close(fd)

    def open(self):
        # type: () -> int
        """ Opens the database file for read and write, creates it when it
        does not exist yet. """

        logging.debug('open compilation database: %s', self.filename)
        return os.open(self.filename,
                       os.O_CREAT | os.O_RDWR | os.O_CLOEXEC,
                       0o664)

    @staticmethod
    def read_all(fd):
        # type: (int) -> bytes
        """ Reads the file from the current position till the end. """

        chunks = []
        while True:
            chunk = os.read(fd, READ_BUFFER_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
        return b''.join(chunks)

    @staticmethod
    def parse(content):
        # type: (bytes) -> List[CommandEntry]
        """ Parses the database content.

        Content which can not be decoded is taken as an empty database, so a
        damaged file does not break the build forever.

        :param content: the raw file content
        :return: list of CommandEntry objects, in the order of the file. """

        try:
            decoded = json.loads(content.decode('utf-8'))
            if not isinstance(decoded, list):
                raise ValueError('top level value is not an array')
            return [CommandEntry.from_json(entry) for entry in decoded]
        except (ValueError, RecursionError) as error:
            # UnicodeDecodeError and JSONDecodeError are both ValueError,
            # deeply nested arrays exhaust the decoder stack
            if content.strip():
                logging.warning('compilation database is not valid, '
                                'starting a new one: %s', error)
            return []

    @staticmethod
    def serialize(entries):
        # type: (List[CommandEntry]) -> bytes
        """ Creates the file content from the entries. """

        content = json.dumps([entry.to_json() for entry in entries],
                             indent=4,
                             ensure_ascii=False)
        return (content + '\n').encode('utf-8')

    def rewrite(self, fd, entries):
        # type: (int, List[CommandEntry]) -> None
        """ Replaces the file content with the given entries. """

        os.ftruncate(fd, 0)
        os.lseek(fd, 0, os.SEEK_SET)
        content = memoryview(self.serialize(entries))
        written = 0
        while written < len(content):
            written += os.write(fd, content[written:])
        logging.debug('compilation database written with %d entries',
                      len(entries))
