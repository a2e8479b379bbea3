#!/usr/bin/env python

"""Neutral-model prior on the population allele frequency.

Under neutral drift the expected number of sites at which i of the
N-1 sampled chromosomes carry the derived allele falls off as 1/i.
The prior mass at grid point i>0 is delta/i, with delta = theta / H
(H the harmonic sum over 1..N-1) so that the variant points together
carry mass theta, and grid point 0 receives the remainder 1 - theta.
"""

import numpy as np
import numba
from loguru import logger

from jointaf.core.cache import FrozenCache
from jointaf.core.exceptions import PriorConfigurationError

logger = logger.bind(name="jointaf")


def frequency_grid_size(nsamples: int, min_points: int = 100) -> int:
    """Return the number of AF grid points for a site.

    It's either min_points or 2N (chromosomes) if that's larger, plus
    one for the allele frequency of zero.
    """
    return max(min_points, 2 * nsamples) + 1


def frequency_grid(npoints: int) -> np.ndarray:
    """Return the npoints equally spaced frequencies i/(npoints-1)."""
    if npoints < 2:
        raise ValueError(f"AF grid needs at least 2 points, not {npoints}")
    return np.arange(npoints) / (npoints - 1)


@numba.jit(nopython=True)
def _nonzero_af_priors(npoints, heterozygosity):
    """JIT'd fill of log10(delta/i) for i in 1..npoints-1. Returns the
    array (entry 0 left unset) and the summed linear mass.
    """
    # calculate sum(1/i)
    sigma = 0.0
    for idx in range(1, npoints):
        sigma += 1.0 / idx

    # delta = theta / sum(1/i)
    delta = heterozygosity / sigma

    priors = np.empty(npoints)
    total = 0.0
    for idx in range(1, npoints):
        value = delta / idx
        priors[idx] = np.log10(value)
        total += value
    return priors, total


class NeutralPrior:
    """Lazily computed log10 AF priors, cached by grid size.

    Parameters
    ----------
    heterozygosity: float
        The population-scaled mutation rate theta. The total prior
        mass on AF > 0 equals this value.
    """
    def __init__(self, heterozygosity: float = 0.001):
        self.heterozygosity = heterozygosity
        self._cache = FrozenCache(self._build)

    def priors_for(self, npoints: int) -> np.ndarray:
        """Return the (read-only) log10 prior for each of npoints AFs.

        Repeated calls with the same npoints return the same array.
        """
        return self._cache.get(npoints)

    def _build(self, npoints: int) -> np.ndarray:
        if npoints < 1:
            raise PriorConfigurationError(
                f"AF grid must have at least one point, not {npoints}")
        if not 0.0 < self.heterozygosity < 1.0:
            raise PriorConfigurationError(
                f"heterozygosity must be in (0, 1), not {self.heterozygosity}")

        # a single point (AF=0) carries all the mass.
        if npoints == 1:
            priors = np.zeros(1)
        else:
            priors, total = _nonzero_af_priors(npoints, float(self.heterozygosity))

            # null frequency for AF=0 is (1 - sum(all other frequencies))
            null = 1.0 - total
            if not null > 0:
                raise PriorConfigurationError(
                    f"heterozygosity={self.heterozygosity} leaves no prior "
                    f"mass for AF=0 (sum of AF>0 priors = {total:.6g}) on a "
                    f"grid of {npoints} points")
            priors[0] = np.log10(null)

        for idx, value in enumerate(priors):
            logger.trace(
                f"Null allele frequency for AF={idx}/{npoints - 1}: {value}")
        logger.debug(
            f"built neutral AF prior for {npoints} points; "
            f"log10 P(AF=0)={priors[0]:.6g}")
        priors.setflags(write=False)
        return priors
