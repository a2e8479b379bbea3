#!/usr/bin/env python

"""Unittests for the shared core utilities.

Tests
-----
1. Genotype ordering matches the lexical AA..TT layout of GL vectors.
2. Genotype classification relative to a ref/alt pair.
3. Params defaults, constraints and assignment validation.
4. FrozenCache reuses one instance per key, across threads too.
"""

import json
import unittest
from concurrent.futures import ThreadPoolExecutor
from pydantic import ValidationError

from jointaf.core.genotypes import (
    GENOTYPES, GENOTYPE_INDEX, CLASS_COLUMNS, GenotypeClass,
    check_base, genotype_of, classify_genotype, biallelic_indices,
)
from jointaf.core.params import Params, GenotypePrior
from jointaf.core.cache import FrozenCache


class TestGenotypes(unittest.TestCase):

    def test_genotype_order(self):
        self.assertEqual(
            GENOTYPES,
            ("AA", "AC", "AG", "AT", "CC", "CG", "CT", "GG", "GT", "TT"))
        self.assertEqual(GENOTYPE_INDEX["GT"], 8)

    def test_check_base(self):
        self.assertEqual(check_base("c"), "C")
        for bad in ("N", "", "AC", 1):
            with self.assertRaises(ValueError):
                check_base(bad)

    def test_genotype_of_is_unordered(self):
        self.assertEqual(genotype_of("T", "A"), "AT")
        self.assertEqual(genotype_of("g", "g"), "GG")

    def test_classify_genotype(self):
        self.assertIs(classify_genotype("CC", "C", "G"), GenotypeClass.HOM_REF)
        self.assertIs(classify_genotype("CG", "C", "G"), GenotypeClass.HET)
        self.assertIs(classify_genotype("GG", "C", "G"), GenotypeClass.HOM_ALT)
        self.assertIs(classify_genotype("AG", "C", "G"), GenotypeClass.OTHER)
        self.assertIs(classify_genotype("AC", "C", "G"), GenotypeClass.OTHER)
        self.assertIs(classify_genotype("TT", "C", "G"), GenotypeClass.OTHER)

    def test_biallelic_indices(self):
        # hom-ref, het, hom-alt in column order
        self.assertEqual(biallelic_indices("T", "A"), (9, 3, 0))
        self.assertEqual(biallelic_indices("A", "T"), (0, 3, 9))
        self.assertEqual(CLASS_COLUMNS[GenotypeClass.HET], 1)
        with self.assertRaises(ValueError):
            biallelic_indices("A", "A")


class TestParams(unittest.TestCase):

    def test_defaults(self):
        params = Params()
        self.assertEqual(params.heterozygosity, 0.001)
        self.assertEqual(params.min_estimation_points, 100)
        self.assertEqual(params.min_allele_frequency, 1e-8)
        self.assertIs(params.genotype_prior, GenotypePrior.FLAT)

    def test_constraints(self):
        with self.assertRaises(ValidationError):
            Params(heterozygosity=0)
        with self.assertRaises(ValidationError):
            Params(min_estimation_points=0)
        with self.assertRaises(ValidationError):
            Params(min_allele_frequency=0.5)
        with self.assertRaises(ValidationError):
            Params(genotype_prior="beta")

    def test_validate_assignment(self):
        params = Params()
        params.genotype_prior = "hardy_weinberg"
        self.assertIs(params.genotype_prior, GenotypePrior.HARDY_WEINBERG)
        with self.assertRaises(ValidationError):
            params.heterozygosity = -0.1

    def test_str_is_json(self):
        data = json.loads(str(Params(heterozygosity=0.01)))
        self.assertEqual(data["heterozygosity"], 0.01)
        self.assertEqual(data["genotype_prior"], "flat")


class TestFrozenCache(unittest.TestCase):

    def setUp(self):
        self.calls = []

        def factory(key):
            self.calls.append(key)
            return [key] * 3

        self.cache = FrozenCache(factory)

    def test_reuses_instance(self):
        first = self.cache.get(4)
        self.assertIs(self.cache.get(4), first)
        self.assertEqual(self.calls, [4])
        self.assertIn(4, self.cache)
        self.assertEqual(len(self.cache), 1)

    def test_threads_share_instance(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(self.cache.get, [7] * 64))
        self.assertTrue(all(i is values[0] for i in values))
        self.assertEqual(len(self.cache), 1)

    def test_errors_are_not_stored(self):
        def factory(key):
            raise KeyError(key)
        cache = FrozenCache(factory)
        with self.assertRaises(KeyError):
            cache.get(1)
        self.assertEqual(len(cache), 0)


if __name__ == "__main__":
    unittest.main()
