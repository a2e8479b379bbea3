#!/usr/bin/env python

"""Params schema for type checking and serialization.

Pydantic Models are similar to dataclases but they also include
*type validation*, meaning that if you try to set an attribute to
the wrong type it will raise an error. By using type validation the
params can be easily serialized to JSON and then reloaded as the
appropriate data types.

These values are normally supplied by the hosting tool that walks
over sites and calls the estimator.
"""

# pylint: disable=no-self-argument, no-name-in-module

from enum import Enum
from pydantic import BaseModel, Field, field_validator
from loguru import logger

logger = logger.bind(name="jointaf")


class GenotypePrior(str, Enum):
    """Prior applied to each sample's genotype likelihoods."""
    FLAT = "flat"
    HARDY_WEINBERG = "hardy_weinberg"


class Params(BaseModel):
    """Parameters for allele frequency posterior estimation."""
    heterozygosity: float = Field(0.001, gt=0, description="theta of the neutral AF prior")
    min_estimation_points: int = Field(100, ge=1, description="min AF grid size (minus one)")
    min_allele_frequency: float = Field(1e-8, gt=0, lt=0.5, description="floor for p and q")
    genotype_prior: GenotypePrior = GenotypePrior.FLAT
    min_pof_report: float = Field(0.95, ge=0, le=1, description="P(f>0) counted as variant in logs")

    class Config:
        """Enables type checking validation when using setattr in API."""
        validate_assignment = True

    def __str__(self):
        return self.model_dump_json(indent=2)

    def __repr__(self):
        return self.model_dump_json(indent=2)

    @field_validator('heterozygosity')
    @classmethod
    def _heterozygosity_validator(cls, value: float) -> float:
        """Unrealistic values are allowed here but are reported. A
        value >= 1 fails later when the neutral prior is built.
        """
        if value > 0.1:
            logger.warning(
                f"heterozygosity={value} is far above typical values (~0.001)")
        return value
