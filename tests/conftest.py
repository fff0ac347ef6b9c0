import json
import logging
from pathlib import Path

import pytest

from orfsets.genome import Contig, Feature, Genome
from orfsets.locations import Location

# frame-1 layout: TAA ATG GCC TTG ATG AAA GGG TAA CCC; peg = second ATG through TAA (13..24)
START_CONTIG = "TAAATGGCCTTGATGAAAGGGTAACCC"
# frame-1 layout: TAA ATG AAA CCC TAA GGG CCC AAA TGA; peg = 4..15
ORF_CONTIG = "TAAATGAAACCCTAAGGGCCCAAATGA"


@pytest.fixture
def start_contig():
    return START_CONTIG


@pytest.fixture
def orf_contig():
    return ORF_CONTIG


@pytest.fixture
def orfsets_log(caplog, monkeypatch):
    """caplog that also sees records from the "orfsets" logger, which does not propagate once configured."""
    monkeypatch.setattr(logging.getLogger("orfsets"), "propagate", True)
    caplog.set_level(logging.INFO, logger="orfsets")
    return caplog


@pytest.fixture
def start_genome():
    peg = Feature("fig|1.1.peg.1", Location("c1", 13, 24))
    return Genome("1.1", "Testus startus", 11, [Contig("c1", START_CONTIG)], [peg])


@pytest.fixture
def orf_genome():
    peg = Feature("fig|2.1.peg.1", Location("c1", 4, 15))
    return Genome("2.1", "Testus orfus", 11, [Contig("c1", ORF_CONTIG)], [peg])


@pytest.fixture
def write_gto(tmp_path):
    """Write a minimal GTO; pegs are (id, contig, begin, strand, length)."""

    def _write(name, contigs, pegs, genetic_code=11, directory: Path = tmp_path):
        data = {
            "id": name,
            "scientific_name": f"Testus {name}",
            "genetic_code": genetic_code,
            "contigs": [{"id": cid, "dna": dna} for cid, dna in contigs],
            "features": [
                {"id": fid, "type": "CDS", "location": [[cid, begin, strand, length]], "function": "hypothetical protein"}
                for fid, cid, begin, strand, length in pegs
            ],
        }
        path = Path(directory) / f"{name}.gto"
        path.write_text(json.dumps(data))
        return path

    return _write
