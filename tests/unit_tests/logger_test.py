# Copyright (c) 2024 Ian Hill
# SPDX-License-Identifier: Apache-2.0

"""Tests for the package logger and its configuration"""

import os
import logging
import tempfile
from io import StringIO
from unittest import TestCase

import leaksim
from leaksim.helpers import logger, configure_logger
from leaksim.models import Execution, Coefficients


def simulate_test(**log_opts):
    configure_logger(**log_opts)
    exe = Execution.from_records([{'instruction': 'MOV #3, #1'}])
    leaksim.generate_traces('Hamming Weight', exe, Coefficients())


class TestLogger(TestCase):
    def setUp(self):
        self._handlers = list(logger.handlers)
        self._level = logger.level

    def tearDown(self):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()
        for handler in self._handlers:
            logger.addHandler(handler)
        logger.setLevel(self._level)

    def test_logger_name(self):
        """Test that the logger has the correct name."""
        with self.assertLogs('leaksim') as captured_logs:
            logger.info("Testing logger's name.")
        self.assertEqual(captured_logs.records[0].name, "leaksim")

    def test_logger_level(self):
        """Test that the package logger collects all levels and the default handler shows INFO and above."""
        self.assertEqual(logger.level, logging.DEBUG)
        for handler in logger.handlers:
            self.assertEqual(handler.level, logging.INFO)

        with self.assertLogs('leaksim', level='WARNING') as captured_logs:
            logger.warning("Warning")
        self.assertEqual(captured_logs.records[0].levelname, "WARNING")

    def test_generation_logging(self):
        """Test that trace generation reports the model used."""
        with self.assertLogs('leaksim') as captured_logs:
            simulate_test()
        self.assertEqual(captured_logs.records[0].getMessage(), "Generating Hamming Weight trace over 1 cycles.")

    def test_configured_handlers(self):
        """Test that custom handlers replace the default ones and respect levels."""
        def get_stream_handler(level):
            log_stream = StringIO()
            stream_handler = logging.StreamHandler(stream=log_stream)
            stream_handler.setLevel(level)
            return log_stream, stream_handler

        # There should be no logging messages, as the stream handler's level is set to WARNING
        log_stream, stream_handler = get_stream_handler(logging.WARNING)
        simulate_test(stream_handler=stream_handler)
        self.assertEqual(log_stream.getvalue(), "")
        self.assertNotIn(self._handlers[0], logger.handlers)

        log_stream, stream_handler = get_stream_handler(logging.INFO)
        simulate_test(stream_handler=stream_handler)
        self.assertEqual(log_stream.getvalue().rstrip(), "Generating Hamming Weight trace over 1 cycles.")

        # Now set the global logger level to WARNING, there should be no messages
        log_stream, stream_handler = get_stream_handler(logging.INFO)
        simulate_test(logging_level=logging.WARNING, stream_handler=stream_handler)
        self.assertEqual(log_stream.getvalue(), "")

    def test_file_handler(self):
        """Test that a file handler receives the generation messages."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = os.path.join(tmp_dir, 'test.log')
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.INFO)
            simulate_test(logging_level=logging.DEBUG, file_handler=file_handler)
            file_handler.flush()
            with open(log_file) as f:
                self.assertEqual(f.read().rstrip(), "Generating Hamming Weight trace over 1 cycles.")
            logger.removeHandler(file_handler)
            file_handler.close()
