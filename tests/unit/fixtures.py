# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

import json
import os.path
import shutil
import tempfile


class Spy:

    def __init__(self):
        self.calls = []

    def call(self, *args):
        self.calls.append(args)


class TempDir:

    def __init__(self):
        self.name = tempfile.mkdtemp('.test', 'compdb', None)

    def __enter__(self):
        return self.name

    def __exit__(self, exc, value, tb):
        self.cleanup()

    def cleanup(self):
        if self.name is not None:
            shutil.rmtree(self.name)


def write_file(filename, content):
    with open(filename, 'wb') as handle:
        handle.write(content if isinstance(content, bytes)
                     else content.encode('utf-8'))


def read_database(filename):
    with open(filename, 'r', encoding='utf-8') as handle:
        return json.load(handle)


def database_in(directory):
    return os.path.join(directory, 'compile_commands.json')
