# -*- coding: utf-8 -*-
# Prisma: Weaving perceptual color schemes from a single seed.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for Prisma.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Prisma"
__description__: Final[str] = (
    "A perceptual color engine: CAM16/HCT conversion with a gamut-constrained "
    "solver and contrast-guaranteed UI color schemes from a single seed."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "author": __author__,
        "version": __version__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
