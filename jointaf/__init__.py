#!/usr/bin/env python

"""API level classes for jointaf allele frequency estimation.

Examples
--------
>>> import jointaf
>>> site = jointaf.SiteContext(
...     reference="A",
...     likelihoods={"s1": gls1, "s2": gls2},
... )
>>> results = jointaf.estimate_site(site)
>>> results["T"].pof_gt_zero

>>> est = jointaf.JointEstimate(params=jointaf.Params(heterozygosity=0.01), cores=4)
>>> est.run(sites)
>>> est.stats
"""

# bring nested functions to top for API access
from jointaf.core.logger_setup import set_log_level
from jointaf.core.params import Params, GenotypePrior
from jointaf.core.exceptions import (
    JointAFError, PriorConfigurationError, SiteContextError,
)
from jointaf.joint_estimate.site import SiteContext, AlleleFrequencyPosterior
from jointaf.joint_estimate.posterior import AlleleFrequencyEstimator, estimate_site
from jointaf.joint_estimate.batch import JointEstimate, summarize

__version__ = "0.1.0"
__author__ = "jointaf developers"

# configure the logger
set_log_level("INFO")
