#!/usr/bin/env python

"""Hardy-Weinberg genotype frequencies for a given allele frequency.

For alt allele frequency f the genotype class frequencies are
(p^2, 2pq, q^2) with p = 1 - f and q = f. Neither allele frequency
is allowed to be exactly 0, so that the log10 values stay finite.
"""

from typing import NamedTuple
import numpy as np
from loguru import logger

from jointaf.core.cache import FrozenCache
from jointaf.core.genotypes import (
    GENOTYPES, NGENOTYPES, CLASS_COLUMNS, GenotypeClass,
    check_base, classify_genotype,
)

logger = logger.bind(name="jointaf")

# tolerance used to decide that p or q is zero.
ZERO_TOLERANCE = 1e-6


class HardyWeinbergEntry(NamedTuple):
    """Linear and log10 (hom-ref, het, hom-alt) frequencies."""
    linear: np.ndarray
    log10: np.ndarray


class HardyWeinberg:
    """Lazily computed Hardy-Weinberg values, cached by exact frequency.

    The AF grid reuses the same float values at every site with the
    same grid size, so lookups are by exact value, not tolerance.
    """
    def __init__(self, min_allele_frequency: float = 1e-8):
        self.min_allele_frequency = min_allele_frequency
        self._cache = FrozenCache(self._build)

    def values_for(self, freq: float) -> HardyWeinbergEntry:
        """Return the HW entry for alt allele frequency freq in [0, 1]."""
        return self._cache.get(float(freq))

    def _build(self, freq: float) -> HardyWeinbergEntry:
        if not 0.0 <= freq <= 1.0:
            raise ValueError(f"allele frequency must be in [0, 1], not {freq}")

        pfreq = 1.0 - freq
        qfreq = freq

        # allele frequencies don't actually equal 0...
        if abs(qfreq) < ZERO_TOLERANCE:
            qfreq = self.min_allele_frequency
            pfreq -= self.min_allele_frequency
        elif abs(pfreq) < ZERO_TOLERANCE:
            pfreq = self.min_allele_frequency
            qfreq -= self.min_allele_frequency

        linear = np.empty(3)
        linear[CLASS_COLUMNS[GenotypeClass.HOM_REF]] = pfreq ** 2
        linear[CLASS_COLUMNS[GenotypeClass.HET]] = 2.0 * pfreq * qfreq
        linear[CLASS_COLUMNS[GenotypeClass.HOM_ALT]] = qfreq ** 2
        log10 = np.log10(linear)
        linear.setflags(write=False)
        log10.setflags(write=False)
        return HardyWeinbergEntry(linear, log10)

    def genotype_priors(
        self,
        entry: HardyWeinbergEntry,
        reference: str,
        alternate: str,
    ) -> np.ndarray:
        """Expand an HW entry into log10 priors on all 10 genotypes.

        Genotypes carrying a base that is neither the reference nor
        the alternate are impossible under this biallelic hypothesis
        and receive -inf.
        """
        reference = check_base(reference)
        alternate = check_base(alternate)
        if reference == alternate:
            raise ValueError(f"alternate cannot equal the reference ({reference})")
        priors = np.full(NGENOTYPES, -np.inf)
        for idx, genotype in enumerate(GENOTYPES):
            gclass = classify_genotype(genotype, reference, alternate)
            if gclass is not GenotypeClass.OTHER:
                priors[idx] = entry.log10[CLASS_COLUMNS[gclass]]
        return priors
