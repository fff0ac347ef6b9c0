import io
import logging
import random

import pytest

from orfsets.genome import Contig, Feature, Genome
from orfsets.locations import Location
from orfsets.samplers import ExhaustivePegSampler, PegStartSampler, RegionCodingSampler
from orfsets.writer import BalancedLabelWriter


def _writer(fuzz=0.0):
    return BalancedLabelWriter(io.StringIO(), fuzz, rng=random.Random(0))


def test_peg_start_rows(start_genome):
    w = _writer()
    PegStartSampler(w, num=2, num_left=2, num_right=2, rng=random.Random(0)).run([start_genome])
    assert w.sink.getvalue().splitlines() == [
        "name\tp.-2\tp.-1\tp.0\tp.1\tp.2\ttype",
        "fig|1.1.peg.1\t-\t-\tA\tT\tG\t0",
        "fig|1.1.peg.1\tC\tC\tT\tT\tG\t0",
        "fig|1.1.peg.1\tT\tG\tA\tT\tG\t1",
    ]
    assert w.counters.orfs == 1
    assert (w.counters.true_count, w.counters.false_count) == (1, 2)


def test_exactly_one_true_row_per_peg(start_contig):
    # two copies of the same gene on separate contigs
    pegs = [Feature("p1", Location("c1", 13, 24)), Feature("p2", Location("c2", 13, 24))]
    genome = Genome("g", "", 11, [Contig("c1", start_contig), Contig("c2", start_contig)], pegs)
    sampler = ExhaustivePegSampler(_writer(), num_left=1, num_right=3)
    for peg in genome.pegs:
        labels = [ex.label for ex in sampler.examples(genome, peg)]
        assert labels.count(True) == 1 and len(labels) == 3


def test_peg_start_samples_at_most_num_pegs(start_contig):
    pegs = [Feature(f"p{i}", Location(f"c{i}", 13, 24)) for i in range(5)]
    genome = Genome("g", "", 11, [Contig(f"c{i}", start_contig) for i in range(5)], pegs)
    w = _writer()
    PegStartSampler(w, num=2, rng=random.Random(3)).run([genome])
    names = {line.split("\t")[0] for line in w.sink.getvalue().splitlines()[1:]}
    assert len(names) == 2
    assert w.counters.orfs == 2


def test_unrecognized_start_is_skipped(start_genome, orfsets_log):
    start_genome.pegs.append(Feature("bad", Location("c1", 7, 24)))
    genome = Genome(start_genome.id, start_genome.name, 11, start_genome.contigs, start_genome.pegs)
    w = _writer()
    ExhaustivePegSampler(w, num_left=2, num_right=2).run([genome])
    assert w.counters.skipped == 1
    assert w.counters.orfs == 1
    assert all(line.startswith(("name", "fig|1.1.peg.1")) for line in w.sink.getvalue().splitlines())
    warnings = [r for r in orfsets_log.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "bad" in warnings[0].getMessage()
    assert "recognizable start codon" in warnings[0].getMessage()


def test_alternative_initiators_are_not_start_candidates():
    # ATG ATT ATC ATA CTG AAA TAA: only the ATG is a bacterial start
    genome = Genome("g", "", 11, [Contig("c1", "ATGATTATCATACTGAAATAA")], [Feature("p1", Location("c1", 1, 21))])
    w = _writer()
    ExhaustivePegSampler(w, num_left=0, num_right=2).run([genome])
    assert w.sink.getvalue().splitlines()[1:] == ["p1\tA\tT\tG\t1"]
    assert (w.counters.true_count, w.counters.false_count) == (1, 0)


def test_peg_with_att_start_is_skipped(orfsets_log):
    genome = Genome("g", "", 11, [Contig("c1", "ATTAAAGGGTAA")], [Feature("p1", Location("c1", 1, 12))])
    w = _writer()
    ExhaustivePegSampler(w, num_left=0, num_right=2).run([genome])
    assert (w.counters.orfs, w.counters.skipped, w.counters.true_count) == (0, 1, 0)
    assert w.sink.getvalue().splitlines()[1:] == []
    assert any(r.levelno == logging.WARNING and "p1" in r.getMessage() for r in orfsets_log.records)


def test_exhaustive_output_is_deterministic(start_genome):
    outs = []
    for seed in (1, 2):
        w = BalancedLabelWriter(io.StringIO(), 0, rng=random.Random(seed))
        ExhaustivePegSampler(w, num_left=3, num_right=3, rng=random.Random(seed)).run([start_genome])
        outs.append(w.sink.getvalue())
    assert outs[0] == outs[1]


def test_region_rows_label_coding_orfs(orf_genome):
    sampler = RegionCodingSampler(_writer(), num=1, width=1000, num_left=2, num_right=2)
    examples = list(sampler.examples(orf_genome, Location("c1", 1, 27)))
    assert [(ex.identifier, ex.label) for ex in examples] == [("c1+13", True), ("c1+25", False)]
    assert examples[0].neighborhood == "CCTAA"
    assert sampler.counters.orfs == 1


def test_region_sampler_run_covers_both_strands(orf_genome):
    w = _writer()
    RegionCodingSampler(w, num=3, width=1000, num_left=4, num_right=4, rng=random.Random(0)).run([orf_genome])
    rows = [line.split("\t") for line in w.sink.getvalue().splitlines()]
    assert len(rows[0]) == 1 + 4 + 4 + 1 + 1
    assert all(len(r) == len(rows[0]) for r in rows)
    minus = [r for r in rows[1:] if "-" in r[0]]
    assert all(r[-1] == "0" for r in minus)
    assert ["c1+13", "1"] in [[r[0], r[-1]] for r in rows[1:]]
    assert w.counters.orfs == 2


def test_region_windows_for_long_contig():
    genome = Genome("g", "", 11, [Contig("c1", "A" * 12000), Contig("c2", "C" * 3000)], [])
    sampler = RegionCodingSampler(_writer(), num=3, width=5000)
    regions = sampler.regions(genome)
    spans = {(r.contig_id, r.left, r.right) for r in regions}
    assert spans == {("c1", 1, 5000), ("c1", 5001, 10000), ("c2", 1, 3000)}
    assert len(regions) == 6
    assert {r.strand for r in regions} == {"+", "-"}
    assert {r.reverse() for r in regions} == set(regions)
    picked = sampler.select(genome)
    assert len(picked) == 3 and len(set(picked)) == 3


@pytest.mark.parametrize("kwargs", [{"num": 0}, {"width": 999}])
def test_region_sampler_rejects_bad_options(kwargs):
    with pytest.raises(ValueError):
        RegionCodingSampler(_writer(), **kwargs)


def test_peg_sampler_rejects_zero_pegs():
    with pytest.raises(ValueError):
        PegStartSampler(_writer(), num=0)
