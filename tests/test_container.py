# do not to pollute the global namespace.
# see: https://python-packaging.readthedocs.io/en/latest/testing.html

import io
import logging
from unittest import TestCase

import smpptlv
from smpptlv import DataSm, DeliverSm, KnownValue, SubmitSm, Tag, Tlv, TlvTag


class TestTlvContainer(TestCase):
    """
    run tests as:
        python -m unittest discover -v -s .
    run one testcase as:
        python -m unittest -v tests.test_container.TestTlvContainer.test_something
    """

    def setUp(self):
        self.submit_sm = SubmitSm(
            source_addr="254722111111",
            destination_addr="254722999999",
            short_message=b"Hello, thanks for shopping with us.",
        )

    def test_starts_empty(self):
        self.assertEqual(self.submit_sm.get_tlvs(), ())
        self.assertFalse(self.submit_sm.has_tlv(Tag.MESSAGE_PAYLOAD))

    def test_order_is_preserved(self):
        r1 = Tlv.new_custom_u16(0x1400, 1)
        r2 = Tlv.new(KnownValue(Tag.SOURCE_PORT, 8080))
        r3 = Tlv.new_custom_string(0x1401, "three")
        for r in (r1, r2, r3):
            self.submit_sm.push_tlv_raw(r)
        self.assertEqual(self.submit_sm.get_tlvs(), (r1, r2, r3))

    def test_get_and_has(self):
        r = Tlv.new_custom_u32(0x1400, 99)
        self.submit_sm.push_tlv_raw(r)
        self.assertTrue(self.submit_sm.has_tlv(TlvTag.other(0x1400)))
        self.assertIs(self.submit_sm.get_tlv(TlvTag.other(0x1400)), r)
        self.assertIsNone(self.submit_sm.get_tlv(TlvTag.other(0x1401)))

    def test_get_is_first_match(self):
        first = Tlv.new_custom_u16(0x1400, 1)
        second = Tlv.new_custom_u16(0x1400, 2)
        self.submit_sm.push_tlv_raw(first)
        self.submit_sm.push_tlv_raw(second)
        self.assertIs(self.submit_sm.get_tlv(TlvTag.other(0x1400)), first)
        self.assertEqual(len(self.submit_sm.get_tlvs()), 2)

    def test_remove(self):
        r1 = Tlv.new_custom_u16(0x1400, 1)
        r2 = Tlv.new_custom_u16(0x1401, 2)
        r3 = Tlv.new_custom_u16(0x1402, 3)
        for r in (r1, r2, r3):
            self.submit_sm.push_tlv_raw(r)

        self.assertIs(self.submit_sm.remove_tlv(TlvTag.other(0x1401)), r2)
        self.assertFalse(self.submit_sm.has_tlv(TlvTag.other(0x1401)))
        self.assertIsNone(self.submit_sm.remove_tlv(TlvTag.other(0x1401)))
        self.assertEqual(self.submit_sm.get_tlvs(), (r1, r3))

    def test_remove_first_of_duplicates(self):
        first = Tlv.new_custom_u16(0x1400, 1)
        second = Tlv.new_custom_u16(0x1400, 2)
        self.submit_sm.push_tlv_raw(first)
        self.submit_sm.push_tlv_raw(second)
        self.assertIs(self.submit_sm.remove_tlv(TlvTag.other(0x1400)), first)
        self.assertIs(self.submit_sm.get_tlv(TlvTag.other(0x1400)), second)

    def test_clear(self):
        tags = [TlvTag.other(0x1400), Tag.SOURCE_PORT]
        self.submit_sm.push_tlv_raw(Tlv.new_custom_u16(0x1400, 1))
        self.submit_sm.push_tlv(KnownValue(Tag.SOURCE_PORT, 8080))
        self.submit_sm.clear_tlvs()
        self.assertEqual(self.submit_sm.get_tlvs(), ())
        for tag in tags:
            self.assertFalse(self.submit_sm.has_tlv(tag))

    def test_get_tlvs_is_a_read_only_view(self):
        self.submit_sm.push_tlv_raw(Tlv.new_custom_u16(0x1400, 1))
        view = self.submit_sm.get_tlvs()
        self.assertIsInstance(view, tuple)
        self.submit_sm.push_tlv_raw(Tlv.new_custom_u16(0x1401, 2))
        self.assertEqual(len(view), 1)

    def test_get_tlvs_mut(self):
        r = Tlv.new_custom_u16(0x1400, 1)
        self.submit_sm.get_tlvs_mut().append(r)
        self.assertTrue(self.submit_sm.has_tlv(TlvTag.other(0x1400)))
        self.submit_sm.get_tlvs_mut().reverse()
        self.assertIs(self.submit_sm.get_tlvs_mut(), self.submit_sm.tlvs)

    def test_push_tlv_wraps_value(self):
        value = KnownValue(Tag.USER_MESSAGE_REFERENCE, 7)
        self.submit_sm.push_tlv(value)
        self.assertEqual(self.submit_sm.get_tlv(Tag.USER_MESSAGE_REFERENCE), Tlv.new(value))

    def test_custom_container(self):
        class Bag(smpptlv.TlvContainer):
            def __init__(self):
                self.items = []
                self.inserted = []

            def get_tlvs_mut(self):
                return self.items

            def on_tlv_insert(self, tag):
                self.inserted.append(tag)

        bag = Bag()
        bag.push_tlv_raw(Tlv.new_custom_u16(0x1400, 1))
        self.assertEqual(bag.inserted, [TlvTag.other(0x1400)])
        self.assertTrue(bag.has_tlv(TlvTag.other(0x1400)))

    def test_container_requires_storage(self):
        with self.assertRaises(TypeError):
            smpptlv.TlvContainer()


class TestShortMessageClearing(TestCase):
    def _pdus(self, short_message):
        return [
            SubmitSm(source_addr="1", destination_addr="2", short_message=short_message),
            DeliverSm(source_addr="1", destination_addr="2", short_message=short_message),
        ]

    def test_message_payload_clears_short_message(self):
        for short_message in [b"hello", b"", b"x" * 254]:
            for pdu in self._pdus(short_message):
                pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"a much longer hello"))
                self.assertEqual(pdu.short_message, b"")
                self.assertEqual(pdu.sm_length, 0)

    def test_other_tlvs_leave_short_message(self):
        for pdu in self._pdus(b"hello"):
            pdu.push_tlv(KnownValue(Tag.SOURCE_PORT, 8080))
            pdu.push_tlv_raw(Tlv.new_custom(0x1400, b"payload"))
            self.assertEqual(pdu.short_message, b"hello")

    def test_custom_tlv_with_message_payload_code_is_not_message_payload(self):
        for pdu in self._pdus(b"hello"):
            pdu.push_tlv_raw(Tlv.new_custom(0x0424, b"raw"))
            self.assertEqual(pdu.short_message, b"hello")

    def test_short_message_set_after_payload_is_cleared_on_next_push(self):
        for pdu in self._pdus(b"hello"):
            pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
            pdu.short_message = b"hi again"
            pdu.push_tlv_raw(Tlv.new_custom_u16(0x1400, 1))
            self.assertEqual(pdu.short_message, b"")

    def test_payload_added_through_get_tlvs_mut_is_cleared_on_next_push(self):
        for pdu in self._pdus(b"hi"):
            pdu.get_tlvs_mut().append(Tlv.new(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload")))
            self.assertEqual(pdu.short_message, b"hi")
            pdu.push_tlv_raw(Tlv.new_custom_u16(0x1400, 1))
            self.assertEqual(pdu.short_message, b"")

    def test_remove_does_not_restore_short_message(self):
        for pdu in self._pdus(b"hello"):
            pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
            removed = pdu.remove_tlv(Tag.MESSAGE_PAYLOAD)
            self.assertIsNotNone(removed)
            self.assertEqual(pdu.short_message, b"")

    def test_clear_does_not_restore_short_message(self):
        for pdu in self._pdus(b"hello"):
            pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
            pdu.clear_tlvs()
            self.assertEqual(pdu.short_message, b"")

    def test_tlvs_given_at_construction(self):
        pdu = SubmitSm(
            source_addr="1",
            destination_addr="2",
            short_message=b"hello",
            tlvs=[Tlv.new(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))],
        )
        self.assertEqual(pdu.short_message, b"")
        self.assertTrue(pdu.has_tlv(Tag.MESSAGE_PAYLOAD))

    def test_data_sm_has_no_side_effect(self):
        data_sm = DataSm(source_addr="1", destination_addr="2")
        data_sm.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
        self.assertFalse(hasattr(data_sm, "short_message"))
        self.assertTrue(data_sm.has_tlv(Tag.MESSAGE_PAYLOAD))

    def test_clearing_is_logged(self):
        with io.StringIO() as _temp_stream:
            _handler = logging.StreamHandler(stream=_temp_stream)
            logger = smpptlv.log.SimpleLogger("test_clearing_is_logged", handler=_handler)
            pdu = SubmitSm(
                source_addr="1",
                destination_addr="2",
                short_message=b"hello",
                logger=logger,
                loglevel="DEBUG",
                log_metadata={"log_id": "some-log-id"},
            )
            pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))

            logged = _temp_stream.getvalue()
            self.assertIn("smpptlv.SubmitSm.on_tlv_insert", logged)
            self.assertIn("some-log-id", logged)
            self.assertIn("submit_sm", logged)

    def test_broken_logger_does_not_break_push(self):
        class BrokenLogger(smpptlv.log.BaseLogger):
            def bind(self, level, log_metadata):
                pass

            def log(self, level, log_data):
                raise RuntimeError("unable to log")

        pdu = DeliverSm(
            source_addr="1", destination_addr="2", short_message=b"hello", logger=BrokenLogger()
        )
        pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
        self.assertEqual(pdu.short_message, b"")


class TestPduArgs(TestCase):
    def test_smpp_command(self):
        self.assertEqual(
            SubmitSm(source_addr="1", destination_addr="2").smpp_command,
            smpptlv.SmppCommand.SUBMIT_SM,
        )
        self.assertEqual(
            DeliverSm(source_addr="1", destination_addr="2").smpp_command,
            smpptlv.SmppCommand.DELIVER_SM,
        )
        self.assertEqual(
            DataSm(source_addr="1", destination_addr="2").smpp_command,
            smpptlv.SmppCommand.DATA_SM,
        )

    def test_base_pdus_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            smpptlv.pdu.Pdu()
        with self.assertRaises(TypeError):
            smpptlv.pdu.ShortMessagePdu(source_addr="1", destination_addr="2")

    def test_bad_args_are_collected(self):
        with self.assertRaises(smpptlv.PduError) as raised:
            SubmitSm(
                source_addr=1,
                destination_addr="2",
                short_message="not bytes",
                esm_class=0x100,
                loglevel="LOUD",
            )
        errors = raised.exception.args[0]
        self.assertEqual(len(errors), 4)
        self.assertTrue(all(isinstance(e, ValueError) for e in errors))

    def test_short_message_too_long(self):
        self.assertRaises(
            smpptlv.PduError, SubmitSm, source_addr="1", destination_addr="2", short_message=b"x" * 255
        )

    def test_bad_tlvs(self):
        self.assertRaises(
            smpptlv.PduError, DataSm, source_addr="1", destination_addr="2", tlvs=[b"\x14\x00"]
        )
        self.assertRaises(
            smpptlv.PduError, DataSm, source_addr="1", destination_addr="2", tlvs="nope"
        )

    def test_bad_logger(self):
        self.assertRaises(
            smpptlv.PduError, DeliverSm, source_addr="1", destination_addr="2", logger="logger"
        )

    def test_log_metadata_is_not_mutated(self):
        log_metadata = {"log_id": "some-log-id"}
        SubmitSm(source_addr="1", destination_addr="2", log_metadata=log_metadata)
        self.assertEqual(log_metadata, {"log_id": "some-log-id"})
