#!/usr/bin/env python

"""Posterior distribution of the population allele frequency.

For each alternate allele b != ref, and each grid frequency f_i:

    P(D | AF=f_i) = prod_samples sum_g HW(g | f_i) * P(g | D_s)

where g runs over hom-ref, het(ref/b) and hom-b, and P(g | D_s) is the
sample's genotype posterior restricted to those three genotypes and
renormalized. Multiplying by the neutral prior P(AF=f_i) and
normalizing over the grid gives the AF posterior, from which
P(f>0) = sum_{i>0} P(AF=f_i | D).

By default each sample's genotype posterior uses a flat genotype
prior and the Hardy-Weinberg weighting enters only at the
marginalization over genotypes. Setting Params.genotype_prior to
"hardy_weinberg" also applies the HW genotype prior for f_i to the
per-sample posterior.

All per-site arrays are created inside `estimate` so a single
estimator can be used from several threads at once.
"""

from typing import Dict, Optional
import numpy as np
from loguru import logger

from jointaf.core.params import Params, GenotypePrior
from jointaf.core.cache import FrozenCache
from jointaf.core.genotypes import BASES, NGENOTYPES, biallelic_indices
from jointaf.joint_estimate.normalize import normalize_from_log10
from jointaf.joint_estimate.neutral_prior import (
    NeutralPrior, frequency_grid, frequency_grid_size,
)
from jointaf.joint_estimate.hardy_weinberg import HardyWeinberg
from jointaf.joint_estimate.site import SiteContext, AlleleFrequencyPosterior

logger = logger.bind(name="jointaf")

# log10 of a uniform prior over the 10 diploid genotypes.
FLAT_GENOTYPE_PRIORS = np.full(NGENOTYPES, np.log10(1.0 / NGENOTYPES))


class AlleleFrequencyEstimator:
    """Estimate AF posteriors at sites, reusing cached priors.

    Parameters
    ----------
    params: Params
        Heterozygosity, minimum grid size, AF floor and the choice of
        per-sample genotype prior. Defaults are used if None.

    Examples
    --------
    >>> est = AlleleFrequencyEstimator()
    >>> site = SiteContext(reference="A", likelihoods={"s1": gls})
    >>> results = est.estimate(site)
    >>> results["T"].pof_gt_zero
    """
    def __init__(self, params: Optional[Params] = None):
        self.params = params if params is not None else Params()
        self.neutral_prior = NeutralPrior(self.params.heterozygosity)
        self.hardy_weinberg = HardyWeinberg(self.params.min_allele_frequency)

    def grid_size(self, nsamples: int) -> int:
        return frequency_grid_size(nsamples, self.params.min_estimation_points)

    def estimate(self, site: SiteContext) -> Dict[str, AlleleFrequencyPosterior]:
        """Return the AF posterior of each alternate allele at a site,
        keyed by alternate base.
        """
        npoints = self.grid_size(site.nsamples)
        log10_priors = self.neutral_prior.priors_for(npoints)
        alts = [i for i in BASES if i != site.reference]
        log10_gls = site.likelihood_matrix()
        genotype_indices = {
            alt: list(biallelic_indices(site.reference, alt)) for alt in alts
        }
        use_hw_prior = self.params.genotype_prior == GenotypePrior.HARDY_WEINBERG

        # log10 P(D | AF=f_i) for each alt allele
        log10_pdata = {alt: np.zeros(npoints) for alt in alts}

        # for each alt allele frequency
        for idx, freq in enumerate(frequency_grid(npoints)):
            hwvals = self.hardy_weinberg.values_for(freq)

            # no samples contribute no terms, leaving the prior alone
            if not site.nsamples:
                continue

            for alt in alts:
                if use_hw_prior:
                    gpriors = self.hardy_weinberg.genotype_priors(
                        hwvals, site.reference, alt)
                else:
                    gpriors = FLAT_GENOTYPE_PRIORS
                posteriors = log10_gls + gpriors

                # (nsamples, 3) ref/het/hom posteriors, each row normalized
                allele_posteriors = normalize_from_log10(
                    posteriors[:, genotype_indices[alt]])

                # HW-weighted sum over genotypes for each sample
                pdata = allele_posteriors @ hwvals.linear
                log10_pdata[alt][idx] = np.log10(pdata).sum()

        results = {}
        for alt in alts:
            logger.trace(f"log10 P(D|AF) for alt allele {alt}: {log10_pdata[alt]}")

            # multiply by null allele frequency priors, then normalize
            posterior = normalize_from_log10(log10_priors + log10_pdata[alt])

            # P(f>0), bounded to deal with precision errors
            pof = min(float(posterior[1:].sum()), 1.0)
            posterior.setflags(write=False)
            result = AlleleFrequencyPosterior(alt, posterior, pof)
            results[alt] = result
            logger.debug(
                f"{site.name or 'site'}: P(f>0), LOD for alt allele {alt}: "
                f"{pof:.6g}, {result.lod:.4f}")
        return results


# shared estimators (and their caches) keyed by the JSON of their params
_ESTIMATORS: FrozenCache = FrozenCache(
    lambda key: AlleleFrequencyEstimator(Params.model_validate_json(key))
)


def shared_estimator(params: Optional[Params] = None) -> AlleleFrequencyEstimator:
    """Return the process-wide estimator for params (defaults if None).
    Equal params always map to the same estimator instance.
    """
    params = params if params is not None else Params()
    return _ESTIMATORS.get(params.model_dump_json())


def estimate_site(
    site: SiteContext,
    params: Optional[Params] = None,
) -> Dict[str, AlleleFrequencyPosterior]:
    """Estimate one site with the shared estimator for params, so the
    neutral prior and HW caches are reused across calls.
    """
    return shared_estimator(params).estimate(site)
