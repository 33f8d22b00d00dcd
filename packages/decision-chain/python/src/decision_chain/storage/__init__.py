# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

from .interface import KeyValueEntry, KeyValueStore
from .memory import MemoryStore
from .file import FileStore

__all__ = ["KeyValueEntry", "KeyValueStore", "MemoryStore", "FileStore"]
