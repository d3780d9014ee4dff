# -*- coding: utf-8 -*-
#                     The LLVM Compiler Infrastructure
#
# This file is distributed under the University of Illinois Open Source
# License. See LICENSE.TXT for details.

import os
import unittest

import libcompdbhook.config as sut


class FromEnvironmentTest(unittest.TestCase):

    def test_defaults(self):
        config = sut.from_environment({})

        self.assertEqual('clang++', config.compiler)
        self.assertEqual(os.getcwd(), config.workspace_dir)
        self.assertIsNone(config.database)
        self.assertEqual(0, config.verbose)

    def test_overrides(self):
        config = sut.from_environment({
            'COMP_DB_HOOK_COMPILER': 'g++',
            'COMP_DB_HOOK_WORKSPACE_DIR': '/repo',
            'COMP_DB_HOOK_DATABASE': '/tmp/cdb.json',
            'COMP_DB_HOOK_VERBOSE': '2',
        })

        self.assertEqual('g++', config.compiler)
        self.assertEqual('/repo', config.workspace_dir)
        self.assertEqual('/tmp/cdb.json', config.database)
        self.assertEqual(2, config.verbose)

    def test_empty_values_are_unset(self):
        config = sut.from_environment({
            'COMP_DB_HOOK_COMPILER': '',
            'COMP_DB_HOOK_WORKSPACE_DIR': '',
            'COMP_DB_HOOK_DATABASE': '',
        })

        self.assertEqual('clang++', config.compiler)
        self.assertEqual(os.getcwd(), config.workspace_dir)
        self.assertIsNone(config.database)

    def test_invalid_verbose_level(self):
        with self.assertLogs(level='WARNING'):
            config = sut.from_environment({'COMP_DB_HOOK_VERBOSE': 'lots'})
        self.assertEqual(0, config.verbose)

        config = sut.from_environment({'COMP_DB_HOOK_VERBOSE': '-3'})
        self.assertEqual(0, config.verbose)


class DatabasePathTest(unittest.TestCase):

    def test_default_is_in_workspace(self):
        config = sut.from_environment({'COMP_DB_HOOK_WORKSPACE_DIR': '/repo'})
        self.assertEqual('/repo/compile_commands.json',
                         sut.database_path(config))

        config = sut.from_environment({'COMP_DB_HOOK_WORKSPACE_DIR': '/repo/'})
        self.assertEqual('/repo/compile_commands.json',
                         sut.database_path(config))

    def test_override(self):
        config = sut.from_environment({
            'COMP_DB_HOOK_WORKSPACE_DIR': '/repo',
            'COMP_DB_HOOK_DATABASE': '/elsewhere/cdb.json',
        })
        self.assertEqual('/elsewhere/cdb.json', sut.database_path(config))
