"""Engine components: probe → extract → filter → collect → export."""

from .channel import ResultChannel
from .dedup import DedupResult, dedupe_file, unique_lines
from .extractor import CandidateSequence, Extractor, SubPattern, query_keys
from .filters import accept, clean, is_noise
from .prober import ProbeOutcome, ProbeResult, Prober
from .thread_pool import ThreadPoolManager

__all__ = [
    "CandidateSequence",
    "DedupResult",
    "Extractor",
    "ProbeOutcome",
    "ProbeResult",
    "Prober",
    "ResultChannel",
    "SubPattern",
    "ThreadPoolManager",
    "accept",
    "clean",
    "dedupe_file",
    "is_noise",
    "query_keys",
    "unique_lines",
]
