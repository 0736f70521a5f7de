"""Configuração do pytest para o motor de fluxos."""

import logging
import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """configure_logging altera o root logger; desfaz após cada teste."""
    from config.logging import CorrelationIdFilter

    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    root.handlers = [
        handler
        for handler in root.handlers
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
    ]
