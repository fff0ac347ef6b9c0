"""
Sampling strategies that turn genomes into labeled codon positions.

- PegStartSampler (strain): a few random pegs per genome; every start codon in
  frame 1 of the peg's ORF is a row, true only at the peg's own start.
- ExhaustivePegSampler (stest): the same rows for every peg, in genome order.
- RegionCodingSampler (otrain): random fixed-width windows on either strand;
  each ORF between consecutive in-frame stops is a row, true when a peg
  occupies it.

Each sampler writes the header, then streams rows into a BalancedLabelWriter.
"""
from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, List, Optional, Sequence

from .codons import starts_for, stops_for
from .formatting import header_fields
from .genome import Feature, Genome
from .locations import Location, create_orf, create_sequence_location
from .sampling import choose_k
from .scanner import FRAMES, CandidateExample
from .writer import BalancedLabelWriter, RunCounters

log = logging.getLogger(__name__)

MIN_REGION_WIDTH = 1000


class ExampleSampler:
    """Shared driver: header, genome loop, candidate loop, row submission."""

    command = ""

    def __init__(
        self,
        writer: BalancedLabelWriter,
        num_left: int = 52,
        num_right: int = 20,
        rng: Optional[random.Random] = None,
    ):
        if num_left < 0 or num_right < 0:
            raise ValueError("window spans must be non-negative")
        self.writer = writer
        self.num_left = num_left
        self.num_right = num_right
        self.rng = rng if rng is not None else random.Random()

    @property
    def counters(self) -> RunCounters:
        return self.writer.counters

    def select(self, genome: Genome) -> Sequence:
        raise NotImplementedError

    def examples(self, genome: Genome, item) -> Iterator[CandidateExample]:
        raise NotImplementedError

    def run(self, genomes: Iterable[Genome]) -> RunCounters:
        self.writer.write_header(header_fields(self.num_left, self.num_right))
        for genome in genomes:
            log.info("Processing genome %s.", genome)
            for item in self.select(genome):
                for ex in self.examples(genome, item):
                    self.writer.submit(ex.label, ex.identifier, ex.neighborhood)
        return self.counters


class PegSampler(ExampleSampler):
    def examples(self, genome: Genome, peg: Feature) -> Iterator[CandidateExample]:
        """Every frame-1 start in the peg's ORF, labeled true at the peg's own start."""
        orf = create_orf(genome, peg.location)
        true_start = orf.relative_position(peg.location.begin)
        starts = starts_for(genome.genetic_code)
        if not orf.is_codon(starts, true_start):
            log.warning("Peg %s at %s does not have a recognizable start codon.", peg.id, peg.location)
            self.counters.skipped += 1
            return
        for pos in orf.scan(starts, 1):
            yield CandidateExample(peg.id, orf.neighborhood(pos, self.num_left, self.num_right), pos == true_start)
        self.counters.orfs += 1


class PegStartSampler(PegSampler):
    command = "strain"

    def __init__(self, writer: BalancedLabelWriter, num: int = 2, **kwargs):
        super().__init__(writer, **kwargs)
        if num < 1:
            raise ValueError("Number of pegs per genome must be greater than 0.")
        self.num = num

    def select(self, genome: Genome) -> List[Feature]:
        return choose_k(genome.pegs, self.num, self.rng) if genome.pegs else []


class ExhaustivePegSampler(PegSampler):
    command = "stest"

    def select(self, genome: Genome) -> List[Feature]:
        return list(genome.pegs)


class RegionCodingSampler(ExampleSampler):
    command = "otrain"

    def __init__(self, writer: BalancedLabelWriter, num: int = 3, width: int = 5000, **kwargs):
        super().__init__(writer, **kwargs)
        if num < 1:
            raise ValueError("Number of regions must be greater than 0.")
        if width < MIN_REGION_WIDTH:
            raise ValueError(f"Region width must be at least {MIN_REGION_WIDTH}.")
        self.num = num
        self.width = width

    def regions(self, genome: Genome) -> List[Location]:
        """Whole windows of ``width`` on each contig, both strands; a short contig is one window."""
        out: List[Location] = []
        w = self.width
        for contig in genome.contigs:
            n = len(contig)
            if n == 0:
                continue
            if n < w:
                spans = [(1, n)]
            else:
                spans = [(i, i + w - 1) for i in range(1, n - w + 2, w)]
            for b, e in spans:
                loc = Location(contig.id, b, e)
                out.append(loc)
                out.append(loc.reverse())
        return out

    def select(self, genome: Genome) -> List[Location]:
        regions = self.regions(genome)
        return choose_k(regions, self.num, self.rng) if regions else []

    def examples(self, genome: Genome, region: Location) -> Iterator[CandidateExample]:
        """One row per pair of consecutive in-frame stops, at the closing stop."""
        seq_loc = create_sequence_location(genome, region)
        stops = stops_for(genome.genetic_code)
        for frame in FRAMES:
            positions = seq_loc.scan(stops, frame)
            prev = next(positions, None)
            if prev is None:
                continue
            for pos in positions:
                coding = genome.is_coding(seq_loc.real_location(prev + 3, pos + 2))
                yield CandidateExample(
                    seq_loc.position_string(pos),
                    seq_loc.neighborhood(pos, self.num_left, self.num_right),
                    coding,
                )
                prev = pos
        self.counters.orfs += 1


SAMPLERS = {cls.command: cls for cls in (PegStartSampler, ExhaustivePegSampler, RegionCodingSampler)}

__all__ = [
    "ExampleSampler",
    "ExhaustivePegSampler",
    "MIN_REGION_WIDTH",
    "PegStartSampler",
    "RegionCodingSampler",
    "SAMPLERS",
]
