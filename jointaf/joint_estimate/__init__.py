#!/usr/bin/env python

"""Joint estimation of population allele frequency at a site.

Substeps:
1. build (or fetch cached) neutral prior on the AF grid.
2. fetch (or build cached) Hardy-Weinberg values for each grid AF.
3. marginalize each sample's genotype posteriors over HW genotypes.
4. combine with the prior and normalize to get P(AF | D) and P(f>0).
"""
