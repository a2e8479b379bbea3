#!/usr/bin/env python

"""Per-site input and per-alternate output objects.

A SiteContext is built by the caller for every site from its
genotype likelihood model; it is validated once on construction and
is immutable afterwards. An AlleleFrequencyPosterior is produced
fresh for each alternate allele at each site.
"""

# pylint: disable=no-self-argument, no-name-in-module

from typing import Dict, Optional
from dataclasses import dataclass
import numpy as np
from pydantic import BaseModel, ValidationError, field_validator

from jointaf.core.exceptions import SiteContextError
from jointaf.core.genotypes import NGENOTYPES, check_base


class SiteContext(BaseModel):
    """Reference base and genotype log10-likelihoods for one site."""
    reference: str
    likelihoods: Dict[str, np.ndarray] = {}
    name: Optional[str] = None

    class Config:
        """numpy arrays are stored as-is; sites are immutable."""
        arbitrary_types_allowed = True
        frozen = True

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except ValidationError as inst:
            raise SiteContextError(str(inst)) from inst

    @field_validator('reference')
    @classmethod
    def _reference_validator(cls, value: str) -> str:
        return check_base(value)

    @field_validator('likelihoods', mode="before")
    @classmethod
    def _likelihoods_validator(cls, value) -> Dict[str, np.ndarray]:
        """Each sample needs 10 log10 likelihoods without NaN or +inf.
        Stored copies are read-only.
        """
        checked = {}
        for sname, gls in dict(value).items():
            arr = np.array(gls, dtype=np.float64)
            if arr.shape != (NGENOTYPES,):
                raise ValueError(
                    f"sample {sname} has {arr.size} genotype likelihoods, "
                    f"expected {NGENOTYPES}")
            if np.isnan(arr).any() or np.isposinf(arr).any():
                raise ValueError(
                    f"sample {sname} has NaN or +inf genotype likelihoods")
            arr.setflags(write=False)
            checked[str(sname)] = arr
        return checked

    @property
    def nsamples(self) -> int:
        return len(self.likelihoods)

    def likelihood_matrix(self) -> np.ndarray:
        """Return a new (nsamples, 10) array of log10 likelihoods."""
        if not self.likelihoods:
            return np.empty((0, NGENOTYPES))
        return np.vstack(list(self.likelihoods.values()))


@dataclass(frozen=True)
class AlleleFrequencyPosterior:
    """Posterior over the AF grid for one alternate allele."""
    alternate: str
    """: The alternate base evaluated against the reference."""
    posterior: np.ndarray
    """: Normalized posterior probability at each grid point i/(N-1)."""
    pof_gt_zero: float
    """: P(f>0), the summed posterior over grid points 1..N-1, <= 1."""

    @property
    def grid_size(self) -> int:
        return self.posterior.size

    @property
    def frequencies(self) -> np.ndarray:
        return np.arange(self.grid_size) / (self.grid_size - 1)

    @property
    def lod(self) -> float:
        """log10 odds of P(f>0) versus P(f=0)."""
        with np.errstate(divide="ignore"):
            return float(np.log10(self.pof_gt_zero) - np.log10(self.posterior[0]))

    @property
    def map_frequency(self) -> float:
        """Grid frequency with the largest posterior."""
        return float(self.frequencies[np.argmax(self.posterior)])

    @property
    def mean_frequency(self) -> float:
        """Posterior expectation of the allele frequency."""
        return float(np.dot(self.frequencies, self.posterior))
