#!/usr/bin/env python

"""Estimate allele frequency posteriors across many sites.

Sites are independent, so they can be sent to a pool of worker
threads that all share one estimator and its prior caches. Results
are returned in the order the sites were given.
"""

from typing import Dict, List, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import pandas as pd
from loguru import logger

from jointaf.core.params import Params
from jointaf.joint_estimate.site import SiteContext, AlleleFrequencyPosterior
from jointaf.joint_estimate.posterior import AlleleFrequencyEstimator

logger = logger.bind(name="jointaf")

SiteResults = Dict[str, AlleleFrequencyPosterior]

STATS_COLUMNS = [
    "site", "reference", "alternate", "nsamples", "grid_size",
    "pof_gt_zero", "lod", "map_frequency", "mean_frequency",
]


@dataclass
class JointEstimate:
    params: Params = field(default_factory=Params)
    """: Params shared by every site."""
    cores: int = 1
    """: max number of worker threads. 1 runs in the calling thread."""

    # attrs to be filled.
    sites: List[SiteContext] = field(default_factory=list)
    """: Sites from the last call to run()."""
    results: List[SiteResults] = field(default_factory=list)
    """: Per-site results from the last call to run(), in site order."""

    def __post_init__(self):
        if self.cores < 1:
            raise ValueError(f"cores must be >= 1, not {self.cores}")
        self.estimator = AlleleFrequencyEstimator(self.params)

    def run(self, sites: Iterable[SiteContext]) -> List[SiteResults]:
        """Estimate every site and store the results."""
        self.sites = list(sites)
        if self.cores == 1 or len(self.sites) < 2:
            self.results = [self.estimator.estimate(i) for i in self.sites]
        else:
            with ThreadPoolExecutor(max_workers=self.cores) as pool:
                rasyncs = [pool.submit(self.estimator.estimate, i) for i in self.sites]
                # raise exception for any estimation errors
                self.results = [i.result() for i in rasyncs]

        nvariant = sum(
            any(i.pof_gt_zero >= self.params.min_pof_report for i in res.values())
            for res in self.results
        )
        logger.info(
            f"estimated AF posteriors at {len(self.sites)} sites; "
            f"{nvariant} with P(f>0) >= {self.params.min_pof_report}")
        return self.results

    @property
    def stats(self) -> pd.DataFrame:
        """Summary table of the last run, one row per site and alt."""
        return summarize(self.sites, self.results)


def summarize(
    sites: List[SiteContext],
    results: List[SiteResults],
) -> pd.DataFrame:
    """Return a DataFrame with one row per (site, alternate allele).

    Sites without a name are labeled by their index.
    """
    if len(sites) != len(results):
        raise ValueError("sites and results must be the same length")
    rows = []
    for sidx, (site, res) in enumerate(zip(sites, results)):
        label = site.name or str(sidx)
        for alt, post in res.items():
            rows.append([
                label, site.reference, alt, site.nsamples, post.grid_size,
                post.pof_gt_zero, post.lod, post.map_frequency,
                post.mean_frequency,
            ])
    return pd.DataFrame(rows, columns=STATS_COLUMNS)
