# SPDX-FileCopyrightText: 2025-present dynonguyen
#
# SPDX-License-Identifier: MIT
__version__ = "0.3.0"
