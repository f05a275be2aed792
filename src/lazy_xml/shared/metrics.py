"""Stream metrics collected by the reader and the emitter."""

from dataclasses import dataclass


@dataclass
class StreamMetrics:
    """Counters for one pass over an event stream."""

    events_read: int = 0
    events_written: int = 0
    bytes_read: int = 0
    chunks_read: int = 0
    processing_time_ms: float = 0.0

    @property
    def events_per_second(self) -> float:
        """Calculate events handled per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return ((self.events_read + self.events_written) * 1000.0
                / self.processing_time_ms)

    @property
    def bytes_per_chunk(self) -> float:
        """Average number of input units fed to the tokenizer per chunk."""
        if self.chunks_read == 0:
            return 0.0
        return self.bytes_read / self.chunks_read
