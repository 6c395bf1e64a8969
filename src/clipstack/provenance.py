# region Docstring
"""
clipstack.provenance
Heuristic inference of where a clipboard payload came from.
Overview:
- A payload is attributed to a remote device when it carries a Continuity marker, when
    it arrives shortly after the previous capture, or when a Handoff session is active.
    Everything else is local.
Contents:
- Pydantic models:
    - TimingContext: the current time and the time of the previous successful capture.
- Protocols:
    - ProvenanceDetector: detect(representations, timing) -> Provenance
- Detectors:
    - HeuristicProvenanceDetector: the default rule chain.
Design notes:
- The result is a label, not a fact. Rapid local copies within the threshold are
    labelled remote as well.
- resolve_device_name() and is_handoff_active() are placeholders that always return
    None and False. Subclass the detector to supply real lookups.
"""
# endregion
# region Imports
from datetime import datetime
from typing import Iterable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from clipstack.clipboard import Representation
from clipstack.constants import CONTINUITY_MARKERS, HANDOFF_THRESHOLD_SECONDS
from clipstack.models import Provenance

# endregion


class TimingContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    now: datetime
    last_capture_at: Optional[datetime] = None

    @property
    def seconds_since_last_capture(self) -> Optional[float]:
        if self.last_capture_at is None:
            return None
        return (self.now - self.last_capture_at).total_seconds()


@runtime_checkable
class ProvenanceDetector(Protocol):
    def detect(
        self, representations: Iterable[Representation], timing: TimingContext
    ) -> Provenance: ...


class HeuristicProvenanceDetector:
    """
    Default provenance rules, evaluated in order:

    1. A format tag containing every Continuity marker -> remote device.
    2. Less than `threshold` seconds since the previous capture -> remote device.
    3. An active Handoff session -> remote device.
    4. Otherwise local.
    """

    def __init__(self, threshold: float = HANDOFF_THRESHOLD_SECONDS):
        self.threshold = threshold

    def detect(
        self, representations: Iterable[Representation], timing: TimingContext
    ) -> Provenance:
        if any(
            all(marker in rep.format_tag for marker in CONTINUITY_MARKERS)
            for rep in representations
        ):
            return Provenance.remote_device(self.resolve_device_name())

        elapsed = timing.seconds_since_last_capture
        if elapsed is not None and elapsed < self.threshold:
            return Provenance.remote_device(self.resolve_device_name())

        if self.is_handoff_active():
            return Provenance.remote_device(self.resolve_device_name())

        return Provenance.local()

    def resolve_device_name(self) -> Optional[str]:
        return None

    def is_handoff_active(self) -> bool:
        return False


__all__ = ["TimingContext", "ProvenanceDetector", "HeuristicProvenanceDetector"]
