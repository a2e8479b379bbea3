#!/usr/bin/env python

"""Globals for the nucleotide alphabet and diploid genotypes.

Genotype likelihood vectors have one entry per unordered diploid
genotype over ACGT, in lexical order:

    AA AC AG AT CC CG CT GG GT TT

Relative to a (reference, alternate) pair each genotype falls in one
of the GenotypeClass categories. Only HOM_REF, HET and HOM_ALT have a
column in the 3-entry arrays used by the Hardy-Weinberg values, and
that column is looked up in CLASS_COLUMNS rather than taken from the
enum's declaration order.
"""

from typing import Tuple, Dict
from enum import Enum
from itertools import combinations_with_replacement

BASES = "ACGT"

# ('AA', 'AC', 'AG', 'AT', 'CC', 'CG', 'CT', 'GG', 'GT', 'TT')
GENOTYPES: Tuple[str, ...] = tuple(
    "".join(i) for i in combinations_with_replacement(BASES, 2)
)
GENOTYPE_INDEX: Dict[str, int] = {geno: idx for idx, geno in enumerate(GENOTYPES)}
NGENOTYPES = len(GENOTYPES)


class GenotypeClass(str, Enum):
    """Category of a diploid genotype given a ref and alt allele."""
    HOM_REF = "hom_ref"
    HET = "het"
    HOM_ALT = "hom_alt"
    OTHER = "other"


# column of each biallelic class in (p^2, 2pq, q^2) ordered arrays.
CLASS_COLUMNS: Dict[GenotypeClass, int] = {
    GenotypeClass.HOM_REF: 0,
    GenotypeClass.HET: 1,
    GenotypeClass.HOM_ALT: 2,
}


def check_base(base: str) -> str:
    """Return an upper-cased base or raise ValueError if not in ACGT."""
    if not isinstance(base, str) or len(base) != 1 or base.upper() not in BASES:
        raise ValueError(f"base must be one of {BASES}, not {base!r}")
    return base.upper()


def genotype_of(base1: str, base2: str) -> str:
    """Return the unordered genotype name for two bases, e.g. TA -> AT."""
    return "".join(sorted(check_base(base1) + check_base(base2)))


def classify_genotype(genotype: str, reference: str, alternate: str) -> GenotypeClass:
    """Return the GenotypeClass of a genotype under a ref/alt hypothesis."""
    if genotype == reference * 2:
        return GenotypeClass.HOM_REF
    if genotype == alternate * 2:
        return GenotypeClass.HOM_ALT
    if genotype == genotype_of(reference, alternate):
        return GenotypeClass.HET
    return GenotypeClass.OTHER


def biallelic_indices(reference: str, alternate: str) -> Tuple[int, int, int]:
    """Return GENOTYPES indices of the hom-ref, het and hom-alt genotypes,
    in CLASS_COLUMNS order.
    """
    reference = check_base(reference)
    alternate = check_base(alternate)
    if reference == alternate:
        raise ValueError(f"alternate cannot equal the reference ({reference})")
    indices = [0, 0, 0]
    for gclass, genotype in (
        (GenotypeClass.HOM_REF, reference * 2),
        (GenotypeClass.HET, genotype_of(reference, alternate)),
        (GenotypeClass.HOM_ALT, alternate * 2),
    ):
        indices[CLASS_COLUMNS[gclass]] = GENOTYPE_INDEX[genotype]
    return tuple(indices)
