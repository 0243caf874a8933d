import io
import unittest

from fakes import FakeChannel

from expander.channel import Transfer
from expander.config import SequencerConfig
from expander.errors import DeviceAddressError, DeviceOpenError, WriteError
from expander.pattern import popcount
from expander.registers import GPIOA, GPIOB, IODIRA, IODIRB
from expander.sequencer import Direction, ShiftSequencer, State


class ShiftSequencerTestCase(unittest.TestCase):
    def make(self, channel=None, **kwargs):
        self.channel = channel or FakeChannel()
        self.sleeps = []
        self.output = io.StringIO()
        return ShiftSequencer(
            SequencerConfig(**kwargs),
            channel=self.channel,
            sleep=self.sleeps.append,
            output=self.output,
        )

    def test_nominal_transfer_sequence(self):
        sequencer = self.make()
        sequencer.run()

        transfers = self.channel.transfers
        self.assertEqual(len(transfers), 32)
        self.assertEqual(transfers[0], Transfer(IODIRA, 0x00))
        data = transfers[1:30]
        self.assertEqual(len(data), 2 * (7 + 7) + 1)
        self.assertTrue(all(t.register == GPIOA for t in data))
        self.assertEqual(transfers[30], Transfer(GPIOA, 0x00))
        self.assertEqual(transfers[31], Transfer(IODIRA, 0xFF))
        self.assertTrue(all(len(bytes(t)) == 2 for t in transfers))

        self.assertEqual(self.channel.calls[0], "open")
        self.assertEqual(self.channel.calls[1], ("claim", 0x20, False))
        self.assertEqual(self.channel.calls[-1], "close")
        self.assertEqual(sequencer.state, State.CLOSED)

    def test_pattern_walks_and_returns(self):
        self.make().run()
        values = [t.value for t in self.channel.transfers[1:30]]
        sweep = [0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40,
                 0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02]
        self.assertEqual(values, sweep + sweep + [0x01])
        self.assertTrue(all(popcount(v) == 1 for v in values))

    def test_console_output(self):
        self.make().run()
        lines = self.output.getvalue().splitlines()
        self.assertEqual(len(lines), 29)
        self.assertEqual(lines[0], "0000 0001 ")
        self.assertEqual(lines[7], "1000 0000 ")
        self.assertEqual(lines[-1], "0000 0001 ")

    def test_sleeps_after_every_display(self):
        self.make(delay=0.05).run()
        self.assertEqual(self.sleeps, [0.05] * 29)

    def test_zero_limit_shows_initial_pattern_only(self):
        self.make(limit=0, pattern=0x10).run()
        self.assertEqual(
            self.channel.transfers,
            [
                Transfer(IODIRA, 0x00),
                Transfer(GPIOA, 0x10),
                Transfer(GPIOA, 0x00),
                Transfer(IODIRA, 0xFF),
            ],
        )

    def test_port_b_and_force(self):
        self.make(port="B", address=0x27, force=True, limit=1).run()
        self.assertEqual(self.channel.calls[1], ("claim", 0x27, True))
        registers = {t.register for t in self.channel.transfers}
        self.assertEqual(registers, {IODIRB, GPIOB})

    def test_shift_distance(self):
        self.make(shift=2, limit=1).run()
        values = [t.value for t in self.channel.transfers[1:9]]
        self.assertEqual(values, [0x01, 0x04, 0x10, 0x40, 0x01, 0x04, 0x10, 0x40])

    def test_position_tracks_sweep(self):
        positions = []
        sequencer = self.make(limit=1)
        sequencer.sleep = lambda delay: positions.append(sequencer.position)
        sequencer.run()
        self.assertEqual(positions[0], (0, 0, Direction.LEFT))
        self.assertEqual(positions[6], (0, 6, Direction.LEFT))
        self.assertEqual(positions[7], (0, 0, Direction.RIGHT))
        self.assertEqual(positions[13], (0, 6, Direction.RIGHT))
        self.assertIsNone(positions[14])
        self.assertIsNone(sequencer.position)

    def test_interrupt_closes_without_teardown(self):
        def interrupt(delay):
            raise KeyboardInterrupt

        sequencer = self.make()
        sequencer.sleep = interrupt
        with self.assertRaises(KeyboardInterrupt):
            sequencer.run()
        self.assertEqual(
            self.channel.transfers, [Transfer(IODIRA, 0x00), Transfer(GPIOA, 0x01)]
        )
        self.assertEqual(self.channel.calls[-1], "close")
        self.assertIs(sequencer.state, State.FAILED)
        self.assertEqual(sequencer.position, (0, 0, Direction.LEFT))

    def test_open_failure_stops_before_claim(self):
        sequencer = self.make(FakeChannel(fail_open=True))
        with self.assertRaises(DeviceOpenError):
            sequencer.run()
        self.assertEqual(self.channel.calls, ["open", "close"])
        self.assertEqual(sequencer.state, State.FAILED)

    def test_claim_failure_stops_before_write(self):
        sequencer = self.make(FakeChannel(fail_claim=True))
        with self.assertRaises(DeviceAddressError):
            sequencer.run()
        self.assertEqual(self.channel.transfers, [])
        self.assertTrue(self.channel.closed)

    def test_short_write_halts_every_stage(self):
        for index in (0, 1, 15, 29, 30, 31):
            with self.subTest(index=index):
                sequencer = self.make(FakeChannel(short_write_at=index))
                with self.assertRaises(WriteError) as cm:
                    sequencer.run()
                self.assertEqual(len(self.channel.transfers), index + 1)
                self.assertEqual(cm.exception.written, 1)
                self.assertEqual(self.channel.calls[-1], "close")
                self.assertEqual(sequencer.state, State.FAILED)

    def test_configure_failure_prints_nothing(self):
        with self.assertRaises(WriteError):
            self.make(FakeChannel(short_write_at=0)).run()
        self.assertEqual(self.output.getvalue(), "")
        self.assertEqual(self.sleeps, [])


if __name__ == "__main__":
    unittest.main()
