# tests/test_worker.py
# -*- coding: utf-8 -*-
"""Tests for the Qt background worker."""

import threading
from pathlib import Path

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer, Qt

from filecrypt.core.ciphers import Algorithm
from filecrypt.gui.worker import CryptoWorker, start_worker_thread


@pytest.fixture(scope="module", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app

def _run(worker: CryptoWorker) -> list:
    results = []
    worker.finished.connect(lambda success, message: results.append((success, message)))
    worker.run()
    return results


def test_encrypt_then_decrypt(tmp_path: Path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"hello world")

    [(ok, encrypted)] = _run(CryptoWorker("encrypt", str(source), "pw", str(tmp_path), Algorithm.CHACHA20_POLY1305))
    assert ok
    assert encrypted == str(tmp_path / "notes.txt.encrypted")

    out = tmp_path / "out"
    out.mkdir()
    [(ok, decrypted)] = _run(CryptoWorker("decrypt", encrypted, "pw", str(out)))
    assert ok
    assert Path(decrypted).read_bytes() == b"hello world"

def test_failure_is_reported_once_with_message(tmp_path: Path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"hello world")
    [(ok, encrypted)] = _run(CryptoWorker("encrypt", str(source), "pw", str(tmp_path), "aes"))
    assert ok

    results = _run(CryptoWorker("decrypt", encrypted, "wrong", str(tmp_path / "missing-but-unused")))
    assert results == [(False, "Decrypt failed: Decryption failed - check password or file integrity.")]

def test_invalid_arguments_are_rejected():
    with pytest.raises(ValueError):
        CryptoWorker("compress", "a", "pw", ".")
    with pytest.raises(ValueError):
        CryptoWorker("encrypt", "a", "pw", ".")

def test_start_worker_thread_runs_operation_off_the_caller_thread(tmp_path: Path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"hello world")
    worker = CryptoWorker("encrypt", str(source), "pw", str(tmp_path), Algorithm.AES256GCM)
    results = []
    worker.finished.connect(
        lambda success, message: results.append((success, message, threading.get_ident())),
        Qt.DirectConnection,
    )
    finished = []

    thread = start_worker_thread(worker)
    # finished -> thread.quit is queued to this thread, so its event loop must run.
    # The thread deletes itself once finished; only the signals are observed here.
    loop = QEventLoop()
    thread.finished.connect(lambda: finished.append(True))
    thread.finished.connect(loop.quit)
    QTimer.singleShot(60000, loop.quit)
    loop.exec()

    assert finished == [True]
    [(ok, message, ident)] = results
    assert ok
    assert message == str(tmp_path / "notes.txt.encrypted")
    assert ident != threading.get_ident()
