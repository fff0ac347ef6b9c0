"""Labeled start-codon and coding-ORF datasets from annotated bacterial genomes.

Modules:
- codons: start/stop codon sets per genetic code
- locations: strand-aware locations and sequence-bound views, ORF extension
- scanner: frame scans and neighborhood windows around candidate codons
- genome: genome model plus GenBank/GTO loaders
- samplers: peg start, exhaustive peg and region coding samplers
- writer: streaming class-balanced output
"""

__version__ = "0.1.0"

__all__ = [
    "codons",
    "config",
    "formatting",
    "genome",
    "locations",
    "sampling",
    "samplers",
    "scanner",
    "writer",
]
