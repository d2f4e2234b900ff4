import unittest
from liars_dice.core.bid import Bid


class TestBidValidation(unittest.TestCase):
    """
    Tests for `Bid.validate` ensuring the face is one of the dice faces and the quantity is positive.
    Quantities are not capped by the dice in play.
    """

    def test_bid_accepts_more_than_total(self):
        # should not raise
        Bid(12, 2).validate()

    def test_bid_accepts_valid_quantity(self):
        # should not raise
        Bid(5, 6).validate()

    def test_invalid_face_low_and_high(self):
        with self.assertRaises(ValueError):
            Bid(1, 0).validate()
        with self.assertRaises(ValueError):
            Bid(1, 7).validate()

    def test_invalid_quantity_zero(self):
        with self.assertRaises(ValueError):
            Bid(0, 1).validate()

    def test_face_checked_against_given_faces(self):
        Bid(1, 4).validate((1, 2, 3, 4))
        with self.assertRaises(ValueError):
            Bid(1, 5).validate((1, 2, 3, 4))

    def test_by_attributes_player(self):
        b = Bid(2, 3).by(1)
        self.assertEqual(b.player, 1)
        self.assertEqual((b.quantity, b.face), (2, 3))


if __name__ == '__main__':
    unittest.main()
