import unittest

from rotor_and_reflector import Reflector, Rotor, RotorBank, wrap_position
from wirings import ALPHABET, ReflectorModel, RotorModel


def sig(letter):
    return ALPHABET.index(letter)


class RotorTests(unittest.TestCase):
    def test_forward_follows_the_wiring(self):
        rotor = Rotor(RotorModel.I)
        self.assertEqual(rotor.forward(sig("A")), sig("E"))
        self.assertEqual(rotor.forward(sig("E")), sig("L"))

    def test_backward_inverts_forward_for_every_model(self):
        for model in RotorModel:
            rotor = Rotor(model)
            for s in range(26):
                with self.subTest(model=model, signal=s):
                    self.assertEqual(rotor.backward(rotor.forward(s)), s)

    def test_positions_wrap_into_dial_range(self):
        self.assertEqual(Rotor(position=27).position, 1)
        self.assertEqual(Rotor(position=0).position, 26)
        self.assertEqual(Rotor(position=-1).position, 25)
        self.assertEqual(wrap_position(52), 26)

    def test_advance_wraps_26_to_1(self):
        rotor = Rotor(position=26)
        rotor.advance()
        self.assertEqual(rotor.position, 1)

    def test_model_change_rewires(self):
        rotor = Rotor()
        rotor.model = "v"
        self.assertIs(rotor.model, RotorModel.V)
        self.assertEqual(rotor.wiring, "VZBRGITYUPSDNHLXAWMJQOFECK")
        self.assertEqual(rotor.forward(0), sig("V"))

    def test_turnover_is_normalised(self):
        rotor = Rotor(turnover="e")
        self.assertEqual(rotor.turnover, "E")
        self.assertEqual(rotor.turnover_index, 4)


class RotorBankTests(unittest.TestCase):
    def test_default_bank(self):
        bank = RotorBank()
        self.assertEqual(bank.positions, [1, 1, 1])
        self.assertEqual(bank.models, [RotorModel.I] * 3)
        self.assertEqual(bank.turnovers, ["Q"] * 3)
        self.assertEqual([r.slot for r in bank.rotors], [0, 1, 2])

    def test_forward_pass_at_identity_offsets(self):
        # A -> E -> L -> T through three rotor I wheels
        self.assertEqual(RotorBank().forward_pass(sig("A")), sig("T"))
        # S is a fixed point of rotor I on the way back
        self.assertEqual(RotorBank().backward_pass(sig("S")), sig("S"))

    def test_backward_pass_inverts_forward_pass(self):
        bank = RotorBank([
            Rotor(RotorModel.II, 5),
            Rotor(RotorModel.IV, 17),
            Rotor(RotorModel.V, 23),
        ])
        for s in range(26):
            with self.subTest(signal=s):
                self.assertEqual(bank.backward_pass(bank.forward_pass(s)), s)

    def test_position_offsets_change_the_path(self):
        bank = RotorBank()
        before = [bank.forward_pass(s) for s in range(26)]
        bank.set_position(0, 2)
        after = [bank.forward_pass(s) for s in range(26)]
        self.assertNotEqual(before, after)

    def test_slot_zero_always_steps(self):
        bank = RotorBank()
        self.assertEqual(bank.step(), [0])
        self.assertEqual(bank.positions, [2, 1, 1])

    def test_full_revolution_carries_once(self):
        bank = RotorBank()
        carries = 0
        for _ in range(26):
            if 1 in bank.step():
                carries += 1
        self.assertEqual(carries, 1)
        self.assertEqual(bank.positions, [1, 2, 1])

    def test_middle_steps_when_slot_zero_reaches_turnover_index(self):
        bank = RotorBank()
        bank.set_position(0, 15)          # Q has index 16
        self.assertEqual(bank.step(), [0, 1])
        self.assertEqual(bank.positions, [16, 2, 1])

    def test_cascade_reaches_slot_two(self):
        bank = RotorBank()
        bank.set_position(0, 15)
        bank.set_position(1, 15)
        self.assertEqual(bank.step(), [0, 1, 2])
        self.assertEqual(bank.positions, [16, 16, 2])

    def test_middle_at_turnover_does_not_step_by_itself(self):
        bank = RotorBank()
        bank.set_position(1, 15)
        self.assertEqual(bank.step(), [0])
        self.assertEqual(bank.positions, [2, 15, 1])

    def test_turnover_on_wrap(self):
        bank = RotorBank()
        bank.set_position(0, 26)
        bank.set_turnover(0, "B")         # index 1, the position after 26
        self.assertEqual(bank.step(), [0, 1])
        self.assertEqual(bank.positions, [1, 2, 1])

    def test_turnover_a_never_fires(self):
        bank = RotorBank()
        bank.set_turnover(0, "A")
        for _ in range(52):
            self.assertEqual(bank.step(), [0])
        self.assertEqual(bank.positions, [1, 1, 1])

    def test_manual_adjustments(self):
        bank = RotorBank()
        self.assertEqual(bank.shift_position(2, -1), 26)
        self.assertEqual(bank.shift_position(2, 1), 1)
        self.assertEqual(bank.cycle_model(1), RotorModel.II)
        self.assertEqual(bank.cycle_model(1, -2), RotorModel.V)
        bank.set_model(0, "III")
        self.assertEqual(bank.models, [RotorModel.III, RotorModel.V, RotorModel.I])

    def test_bad_slots_and_sizes(self):
        with self.assertRaises(ValueError):
            RotorBank().set_position(3, 1)
        with self.assertRaises(ValueError):
            RotorBank().set_model(-1, "I")
        with self.assertRaises(ValueError):
            RotorBank([Rotor(), Rotor()])


class ReflectorTests(unittest.TestCase):
    def test_reflect_is_a_table_lookup(self):
        refl = Reflector()
        self.assertEqual(refl.reflect(sig("A")), sig("E"))
        self.assertEqual(refl.reflect(sig("T")), sig("S"))

    def test_every_model_reflects_pairwise(self):
        for model in ReflectorModel:
            refl = Reflector(model)
            for s in range(26):
                with self.subTest(model=model, signal=s):
                    self.assertNotEqual(refl.reflect(s), s)
                    self.assertEqual(refl.reflect(refl.reflect(s)), s)

    def test_cycle_and_set_model(self):
        refl = Reflector("b")
        self.assertIs(refl.model, ReflectorModel.B)
        self.assertIs(refl.cycle(), ReflectorModel.C)
        self.assertIs(refl.cycle(), ReflectorModel.A)
        self.assertIs(refl.cycle(-1), ReflectorModel.C)
        self.assertEqual(refl.wiring, "FVPJIAOYEDRZXWGCTKUQSBNMHL")

    def test_unknown_reflector(self):
        with self.assertRaises(ValueError):
            Reflector("D")


if __name__ == "__main__":
    unittest.main()
