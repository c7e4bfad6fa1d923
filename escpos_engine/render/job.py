import logging
import threading
from typing import List

from ..config.settings import JobSettings
from ..devices.base import Device
from ..dsl.commands import TemplatePart
from ..dsl.template_parser import parse_template
from .executor import execute_template

logger = logging.getLogger(__name__)


def run_job(text: str, device: Device, settings: JobSettings) -> List[TemplatePart]:
    """Print one message: feeds, default style, template, feeds, flush.

    The text is parsed completely before the device is touched, so a bad
    template writes nothing.
    """
    template = parse_template(text)
    device.initialize()
    for _ in range(settings.line_feeds_before):
        device.line_feed()
    device.style.bold = settings.bold
    device.style.width = device.style.height = settings.font_size
    execute_template(
        template,
        device,
        line_feeds_after=settings.line_feeds_after,
        cut=settings.cut_after_print,
    )
    logger.info("printed %d instruction(s)", len(template))
    return template


class JobRunner:
    """Serializes jobs against a single device."""

    def __init__(self, device: Device, settings: JobSettings):
        self.device = device
        self.settings = settings
        self._lock = threading.Lock()

    def submit(self, text: str) -> List[TemplatePart]:
        with self._lock:
            return run_job(text, self.device, self.settings)
