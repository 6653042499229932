"""
Measurement vocabulary.

Every clinical test the engine understands is a MeasurementCode. Values are
the field keys the intake form submits, so `MeasurementCode("npc")` works
directly on raw payload keys.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class MeasurementCode(str, Enum):
    """
    Identifier of one clinical optometric test.

    Vergence codes follow  b{i|o}f_{stage}_{distance|near}:
      bif = base-in fusional, bof = base-out fusional,
      stage = blur / break / recovery.
    """
    # Near points
    NPC                   = "npc"
    NPA                   = "npa"

    # Accommodation
    AMPLITUDE_OD          = "amplitude_od"
    AMPLITUDE_OS          = "amplitude_os"
    AF_OD                 = "af_od"
    AF_OS                 = "af_os"
    AF_OU                 = "af_ou"
    NRA                   = "nra"
    PRA                   = "pra"
    AC_RATIO              = "ac_ratio"

    # Alignment
    PHORIA_DISTANCE       = "phoria_distance"
    PHORIA_NEAR           = "phoria_near"
    STEREOPSIS            = "stereopsis"

    # Fusional vergence, near
    BIF_BLUR_NEAR         = "bif_blur_near"
    BIF_BREAK_NEAR        = "bif_break_near"
    BIF_RECOVERY_NEAR     = "bif_recovery_near"
    BOF_BLUR_NEAR         = "bof_blur_near"
    BOF_BREAK_NEAR        = "bof_break_near"
    BOF_RECOVERY_NEAR     = "bof_recovery_near"

    # Fusional vergence, distance (no BI blur at distance)
    BIF_BREAK_DISTANCE    = "bif_break_distance"
    BIF_RECOVERY_DISTANCE = "bif_recovery_distance"
    BOF_BLUR_DISTANCE     = "bof_blur_distance"
    BOF_BREAK_DISTANCE    = "bof_break_distance"
    BOF_RECOVERY_DISTANCE = "bof_recovery_distance"

    @classmethod
    def lookup(cls, key) -> Optional["MeasurementCode"]:
        """Return the code for `key` (member or raw string), or None."""
        if isinstance(key, cls):
            return key
        try:
            return cls(str(key).strip().lower())
        except ValueError:
            return None
