"""
Annotated genomes: contigs, protein-coding features (pegs) and the
coding-overlap test used to label ORFs.

Two on-disk formats are read:
- GenBank (.gb/.gbk/.gbff/.genbank) through Biopython; CDS features become pegs
- SEED genome typed objects (.gto/.json), the JSON layout with ``contigs`` and
  ``features`` lists whose locations are ``[contig, begin, strand, length]``
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

from Bio import SeqIO

from .codons import DEFAULT_GENETIC_CODE
from .errors import GenomeInputError
from .locations import Location

log = logging.getLogger(__name__)

GENBANK_SUFFIXES = {".gb", ".gbk", ".gbff", ".genbank"}
GTO_SUFFIXES = {".gto", ".json"}
PEG_TYPES = {"CDS", "peg"}


@dataclass(frozen=True)
class Feature:
    id: str
    location: Location
    function: str = ""


@dataclass
class Contig:
    id: str
    sequence: str

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass
class Genome:
    id: str
    name: str
    genetic_code: int
    contigs: List[Contig]
    pegs: List[Feature] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._contigs: Dict[str, Contig] = {c.id: c for c in self.contigs}
        # (contig, strand, end) -> begins of the pegs ending there
        self._ends: Dict[Tuple[str, str, int], List[int]] = {}
        for peg in self.pegs:
            loc = peg.location
            self._ends.setdefault((loc.contig_id, loc.strand, loc.end), []).append(loc.begin)

    def __str__(self) -> str:
        return f"{self.id} ({self.name})" if self.name else self.id

    @property
    def length(self) -> int:
        return sum(len(c) for c in self.contigs)

    def contig(self, contig_id: str) -> Contig:
        try:
            return self._contigs[contig_id]
        except KeyError:
            raise GenomeInputError(f"contig {contig_id} not found in genome {self.id}") from None

    def is_coding(self, location: Location) -> bool:
        """True if a peg on the same strand ends where ``location`` ends and starts inside it."""
        begins = self._ends.get((location.contig_id, location.strand, location.end), ())
        lo, hi = location.left, location.right
        return any(lo <= b <= hi for b in begins)


# ----- GenBank ---------------------------------------------------------------

def _peg_id(feat, genome_id: str, n: int) -> str:
    for key in ("locus_tag", "protein_id", "gene"):
        vals = feat.qualifiers.get(key)
        if vals:
            return str(vals[0])
    return f"{genome_id}.peg.{n}"


def _load_genbank(path: Path) -> Genome:
    genome_id = path.stem
    name = ""
    code = None
    contigs: List[Contig] = []
    pegs: List[Feature] = []
    for rec in SeqIO.parse(str(path), "genbank"):
        if not name:
            name = str(rec.annotations.get("organism") or rec.description or "")
        contigs.append(Contig(rec.id, str(rec.seq).upper()))
        for feat in rec.features:
            if feat.type != "CDS" or "pseudo" in feat.qualifiers:
                continue
            if code is None and feat.qualifiers.get("transl_table"):
                code = int(feat.qualifiers["transl_table"][0])
            s, e = int(feat.location.start), int(feat.location.end)
            strand = int(feat.location.strand or 1)
            loc = Location(rec.id, s + 1, e) if strand == 1 else Location(rec.id, e, s + 1)
            product = feat.qualifiers.get("product", [""])[0]
            pegs.append(Feature(_peg_id(feat, genome_id, len(pegs) + 1), loc, product))
    if not contigs:
        raise GenomeInputError(f"no sequence records in {path}")
    return Genome(genome_id, name, code or DEFAULT_GENETIC_CODE, contigs, pegs)


# ----- GTO -------------------------------------------------------------------

def _gto_location(segments: List) -> Location:
    first, last = segments[0], segments[-1]
    contig_id = str(first[0])
    begin = int(first[1])
    strand = first[2]
    if strand == "-":
        end = int(last[1]) - int(last[3]) + 1
    else:
        end = int(last[1]) + int(last[3]) - 1
    return Location(contig_id, begin, end)


def _load_gto(path: Path) -> Genome:
    data = json.loads(path.read_text())
    if not isinstance(data, dict) or "contigs" not in data:
        raise GenomeInputError(f"{path} is not a genome typed object")
    contigs = [Contig(str(c["id"]), str(c["dna"]).upper()) for c in data["contigs"]]
    pegs: List[Feature] = []
    for feat in data.get("features", []):
        if feat.get("type") not in PEG_TYPES or not feat.get("location"):
            continue
        pegs.append(Feature(str(feat["id"]), _gto_location(feat["location"]), str(feat.get("function", ""))))
    return Genome(
        str(data.get("id", path.stem)),
        str(data.get("scientific_name", "")),
        int(data.get("genetic_code", DEFAULT_GENETIC_CODE)),
        contigs,
        pegs,
    )


def load_genome(path: str | Path) -> Genome:
    p = Path(path)
    if not p.is_file():
        raise GenomeInputError(f"genome file {p} not found or unreadable")
    suffix = p.suffix.lower()
    try:
        if suffix in GENBANK_SUFFIXES:
            return _load_genbank(p)
        if suffix in GTO_SUFFIXES:
            return _load_gto(p)
    except (OSError, ValueError, KeyError, IndexError, TypeError) as exc:
        raise GenomeInputError(f"cannot read genome {p}: {exc}") from exc
    raise GenomeInputError(f"unrecognized genome file type: {p}")


class GenomeDirectory:
    """Genome files in a directory, loaded one at a time in file-name order."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.is_dir():
            raise GenomeInputError(f"input directory {self.path} not found or invalid")
        self.files = sorted(
            f for f in self.path.iterdir() if f.is_file() and f.suffix.lower() in GENBANK_SUFFIXES | GTO_SUFFIXES
        )

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[Genome]:
        for f in self.files:
            log.debug("Loading genome from %s.", f)
            yield load_genome(f)


def iter_genomes(path: str | Path) -> Iterable[Genome]:
    """Genomes under a directory, or the single genome in a file."""
    p = Path(path)
    if p.is_dir():
        genomes = GenomeDirectory(p)
        log.info("%d genomes found in %s.", len(genomes), p)
        return genomes
    return [load_genome(p)]


__all__ = ["Contig", "Feature", "Genome", "GenomeDirectory", "iter_genomes", "load_genome"]
