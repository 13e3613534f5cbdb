# filecrypt/gui/worker.py
# -*- coding: utf-8 -*-
"""
Worker object for running encryption or decryption in a background thread,
reporting the outcome via a Qt signal so the GUI is never blocked by key derivation.

Host-facing API: nothing in filecrypt imports this module; a Qt host constructs a
CryptoWorker and hands it to start_worker_thread(). Requires the "gui" extra (PySide6).
"""

import logging
from PySide6.QtCore import QObject, QThread, Signal

from ..core.ciphers import Algorithm
from ..core.file_handler import encrypt_file, decrypt_file
from ..utils.exceptions import FileCryptError

logger = logging.getLogger(__name__)

class CryptoWorker(QObject):
    """
    QObject worker that performs one encryption or decryption.

    Signals:
        finished(bool, str): Emitted exactly once when the operation completes.
                             Args: success, and the output path or an error message.
    """
    finished = Signal(bool, str)

    def __init__(self, mode: str, file_path: str, password: str | bytes, output_dir: str,
                 algorithm: Algorithm | str | None = None, parent: QObject | None = None):
        """
        Args:
            mode: 'encrypt' or 'decrypt'.
            file_path: File to encrypt, or container to decrypt.
            password: The user's password.
            output_dir: Directory that receives the output file.
            algorithm: Required for 'encrypt'; ignored for 'decrypt' (read from the container).
            parent: Parent QObject.
        """
        super().__init__(parent)
        if mode not in ("encrypt", "decrypt"):
            raise ValueError(f"Invalid mode specified for worker: {mode}")
        if mode == "encrypt" and algorithm is None:
            raise ValueError("An algorithm is required for encryption.")
        self.mode = mode
        self.file_path = file_path
        self.password = password
        self.output_dir = output_dir
        self.algorithm = algorithm
        logger.debug(f"CryptoWorker initialized for mode '{self.mode}'")

    def run(self):
        """
        Execute the operation. Intended to run in a separate thread via QThread.started;
        cancellation is not supported, a discarded worker's result is simply ignored.
        """
        logger.info(f"Worker starting {self.mode} operation...")
        success = False
        try:
            if self.mode == "encrypt":
                message = encrypt_file(self.file_path, self.password, self.algorithm, self.output_dir)
            else:
                message = decrypt_file(self.file_path, self.password, self.output_dir)
            success = True
        except FileCryptError as e:
            # Already logged where it was detected
            message = f"{self.mode.capitalize()} failed: {e}"
        except Exception as e:
            message = f"An unexpected error occurred during {self.mode}: {e}"
            logger.critical(f"Unexpected error in worker run: {e}", exc_info=True)
        finally:
            self.password = None

        logger.info(f"Worker finished. Success: {success}.")
        self.finished.emit(success, message)

def start_worker_thread(worker: CryptoWorker, parent: QObject | None = None) -> QThread:
    """Moves the worker to a new QThread, wires up run/cleanup and starts the thread."""
    thread = QThread(parent)
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.finished.connect(thread.quit)
    worker.finished.connect(worker.deleteLater)
    thread.finished.connect(thread.deleteLater)
    thread.start()
    logger.debug("Background thread started.")
    return thread
