import random

from django.test import SimpleTestCase

from stores.models import Store
from stores.services import average_of, calculate_store_ratings


def rows(store_id, *scores):
    return [{"store_id": store_id, "rating": s} for s in scores]


class AverageOfTests(SimpleTestCase):
    def test_no_scores_is_zero(self):
        self.assertEqual(average_of([]), 0)

    def test_rounds_half_up_to_one_decimal(self):
        self.assertEqual(average_of([5, 4, 4, 4]), 4.3)  # 4.25
        self.assertEqual(average_of([1, 2]), 1.5)
        self.assertEqual(average_of([1, 1, 2, 2, 2, 2, 2, 2]), 1.8)  # 1.75
        self.assertEqual(average_of([4, 4, 5]), 4.3)  # 4.333..

    def test_accepts_generators(self):
        self.assertEqual(average_of(s for s in [2, 3]), 2.5)


class CalculateStoreRatingsTests(SimpleTestCase):
    def setUp(self):
        self.s1 = Store(id=1, name="One", email="one@store.de", address="A 1")
        self.s2 = Store(id=2, name="Two", email="two@store.de", address="B 2")

    def test_three_ratings(self):
        (rated,) = calculate_store_ratings([self.s1], rows(1, 5, 4, 3))
        self.assertIs(rated.store, self.s1)
        self.assertEqual(rated.average_rating, 4.0)
        self.assertEqual(rated.total_ratings, 3)

    def test_store_without_ratings(self):
        (rated,) = calculate_store_ratings([self.s2], rows(1, 5))
        self.assertEqual(rated.average_rating, 0)
        self.assertEqual(rated.total_ratings, 0)

    def test_one_result_per_store_in_store_order(self):
        result = calculate_store_ratings([self.s2, self.s1], rows(1, 2, 4) + rows(2, 5))
        self.assertEqual([r.store.id for r in result], [2, 1])
        self.assertEqual((result[0].average_rating, result[0].total_ratings), (5.0, 1))
        self.assertEqual((result[1].average_rating, result[1].total_ratings), (3.0, 2))

    def test_ratings_of_unknown_stores_are_ignored(self):
        (rated,) = calculate_store_ratings([self.s1], rows(1, 3) + rows(99, 1, 1))
        self.assertEqual((rated.average_rating, rated.total_ratings), (3.0, 1))

    def test_independent_of_rating_order(self):
        ratings = rows(1, 5, 4, 4, 4, 1) + rows(2, 3, 2)
        expected = calculate_store_ratings([self.s1, self.s2], ratings)
        rng = random.Random(7)
        for _ in range(10):
            shuffled = ratings[:]
            rng.shuffle(shuffled)
            self.assertEqual(calculate_store_ratings([self.s1, self.s2], shuffled), expected)
