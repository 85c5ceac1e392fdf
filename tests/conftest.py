#!/usr/bin/env python3

import fsspec
import pytest

assertion_count = 0


def pytest_assertion_pass(item, lineno, orig, expl):
    global assertion_count
    assertion_count += 1


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    print(f'{assertion_count} assertions tested.')


def _clear_memory_file_system(fileSystem):
    # The store of fsspec's MemoryFileSystem is global, i.e., shared between all instances.
    fileSystem.store.clear()
    fileSystem.pseudo_dirs.clear()
    fileSystem.pseudo_dirs.append('')


@pytest.fixture(name="memory_fs")
def fixture_memory_fs():
    fileSystem = fsspec.filesystem("memory")
    _clear_memory_file_system(fileSystem)
    yield fileSystem
    _clear_memory_file_system(fileSystem)
