# SPDX-FileCopyrightText: 2025-present dynonguyen
#
# SPDX-License-Identifier: MIT

"""Renamer - Batch File Renaming Engine."""

from renamer.__about__ import __version__

__all__ = ["__version__"]
