# do not to pollute the global namespace.
# see: https://python-packaging.readthedocs.io/en/latest/testing.html

import ast
import io
import logging
from unittest import TestCase

import smpptlv
from smpptlv import KnownValue, Tag


class TestSimpleLogger(TestCase):
    """
    run tests as:
        python -m unittest discover -v -s .
    run one testcase as:
        python -m unittest -v tests.test_logger.TestSimpleLogger.test_something
    """

    def setUp(self):
        self._temp_stream = io.StringIO()
        self.handler = logging.StreamHandler(stream=self._temp_stream)

    def tearDown(self):
        self._temp_stream.close()

    def _events(self):
        return [ast.literal_eval(line) for line in self._temp_stream.getvalue().splitlines()]

    def test_event_is_rendered_with_metadata(self):
        logger = smpptlv.log.SimpleLogger("test_event_is_rendered_with_metadata", handler=self.handler)
        logger.bind(level="DEBUG", log_metadata={"smpp_command": "deliver_sm"})
        logger.log(logging.DEBUG, {"event": "smpptlv.DeliverSm.on_tlv_insert", "cleared_sm_length": 3})

        events = self._events()
        self.assertEqual(len(events), 1)
        self.assertEqual(list(events[0])[0], "timestamp")
        self.assertEqual(events[0]["event"], "smpptlv.DeliverSm.on_tlv_insert")
        self.assertEqual(events[0]["cleared_sm_length"], 3)
        self.assertEqual(events[0]["smpp_command"], "deliver_sm")

    def test_metadata_is_copied_at_bind(self):
        log_metadata = {"log_id": "one"}
        logger = smpptlv.log.SimpleLogger("test_metadata_is_copied_at_bind", handler=self.handler)
        logger.bind(level="DEBUG", log_metadata=log_metadata)
        log_metadata["log_id"] = "two"
        logger.log(logging.DEBUG, {"event": "e"})

        self.assertEqual(self._events()[0]["log_id"], "one")

    def test_below_level_is_not_logged(self):
        logger = smpptlv.log.SimpleLogger("test_below_level_is_not_logged", handler=self.handler)
        logger.bind(level="INFO", log_metadata={})
        logger.log(logging.DEBUG, {"event": "hidden"})

        self.assertEqual(self._temp_stream.getvalue(), "")

    def test_rebinding_does_not_duplicate_output(self):
        logger = smpptlv.log.SimpleLogger("test_rebinding_does_not_duplicate_output", handler=self.handler)
        logger.bind(level="DEBUG", log_metadata={})
        logger.bind(level="DEBUG", log_metadata={"smpp_command": "data_sm"})
        logger.log(logging.DEBUG, {"event": "e"})

        events = self._events()
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]["smpp_command"], "data_sm")

    def test_log_without_bind(self):
        logger = smpptlv.log.SimpleLogger("test_log_without_bind", handler=self.handler)
        logger.log(logging.WARNING, {"event": "unbound"})

        self.assertEqual(self._events()[0]["event"], "unbound")

    def test_bad_args(self):
        self.assertRaises(ValueError, smpptlv.log.SimpleLogger, 1234)
        self.assertRaises(ValueError, smpptlv.log.SimpleLogger, "name", handler="handler")
        logger = smpptlv.log.SimpleLogger("test_bad_args")
        self.assertRaises(ValueError, logger.bind, level="LOUD", log_metadata={})


class RecordingLogger(smpptlv.log.BaseLogger):
    """
    keeps the bound metadata and the events it is given.
    """

    def __init__(self):
        self.level = None
        self.log_metadata = None
        self.events = []

    def bind(self, level, log_metadata):
        self.level = level
        self.log_metadata = log_metadata

    def log(self, level, log_data):
        self.events.append((level, log_data))


class TestCustomLogger(TestCase):
    """
    run tests as:
        python -m unittest discover -v -s .
    run one testcase as:
        python -m unittest -v tests.test_logger.TestCustomLogger.test_something
    """

    def setUp(self):
        self.logger = RecordingLogger()

    def test_pdu_binds_smpp_command(self):
        smpptlv.DataSm(
            source_addr="1",
            destination_addr="2",
            logger=self.logger,
            loglevel="debug",
            log_metadata={"log_id": "some-log-id"},
        )
        self.assertEqual(self.logger.level, "DEBUG")
        self.assertEqual(
            self.logger.log_metadata, {"log_id": "some-log-id", "smpp_command": "data_sm"}
        )

    def test_pdu_clearing_event(self):
        pdu = smpptlv.SubmitSm(
            source_addr="1", destination_addr="2", short_message=b"hello", logger=self.logger
        )
        pdu.push_tlv(KnownValue(Tag.SOURCE_PORT, 8080))
        self.assertEqual(self.logger.events, [])

        pdu.push_tlv(KnownValue(Tag.MESSAGE_PAYLOAD, b"payload"))
        pdu.push_tlv(KnownValue(Tag.DESTINATION_PORT, 8080))
        self.assertEqual(len(self.logger.events), 1)
        level, event = self.logger.events[0]
        self.assertEqual(level, logging.DEBUG)
        self.assertEqual(event["event"], "smpptlv.SubmitSm.on_tlv_insert")
        self.assertEqual(event["cleared_sm_length"], 5)

    def test_codec_unknown_tag_event(self):
        codec = smpptlv.SimpleTlvCodec(logger=self.logger)
        codec.decode(b"\x20\x00\x00\x01\x07" + b"\x02\x0a\x00\x02\x1f\x90")

        self.assertEqual(len(self.logger.events), 1)
        level, event = self.logger.events[0]
        self.assertEqual(level, logging.DEBUG)
        self.assertEqual(event["event"], "smpptlv.SimpleTlvCodec.decode")
        self.assertEqual(event["tag"], "0x2000")
        self.assertTrue(event["vendor"])
