"""ModelessApp — wires configuration, engines and one controller per document."""

from __future__ import annotations

import logging
from typing import Callable

import modeless.log  # registers TRACE level and logger.trace()
from modeless.config import ConfigManager
from modeless.core.controller import ConversionController
from modeless.core.event_bus import EventBus
from modeless.i18n import I18n
from modeless.platform.document_adapter import IDocumentAdapter
from modeless.platform.engine_adapter import IConversionEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[[IDocumentAdapter], IConversionEngine]


class ModelessApp:
    """Keeps exactly one :class:`ConversionController` per attached document.

    ``engine_factory`` builds the engine for a document; by default it is a
    :class:`~modeless.engine.dictionary_engine.DictionaryEngine` configured
    from the candidate-key and dictionary settings.
    """

    def __init__(
        self,
        config: ConfigManager | None = None,
        engine_factory: EngineFactory | None = None,
        debug: bool = False,
        config_path: str | None = None,
    ):
        self.config = config or ConfigManager(config_path=config_path, debug=debug)
        self.debug = debug or bool(self.config.get('debug'))
        self.event_bus = EventBus()
        self.i18n = I18n(self.config.get('language', 'auto'))
        self._engine_factory = engine_factory or self._default_engine_factory
        self._dictionary: dict | None = None
        self._controllers: dict[int, ConversionController] = {}

    # ------------------------------------------------------------------
    # Engines
    # ------------------------------------------------------------------

    def _default_engine_factory(self, document: IDocumentAdapter) -> IConversionEngine:
        from modeless.engine.dictionary import load_dictionary
        from modeless.engine.dictionary_engine import DictionaryEngine

        if self._dictionary is None:
            self._dictionary = load_dictionary(self.config.get('dictionary_path'))
            logger.debug("Dictionary loaded: %d readings", len(self._dictionary))
        return DictionaryEngine(
            document,
            dictionary=self._dictionary,
            next_keys=self.config.get('next_candidate_keys'),
            previous_keys=self.config.get('previous_candidate_keys'),
            commit_keys=self.config.get('commit_keys'),
            debug=self.debug,
        )

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def attach(self, document: IDocumentAdapter, enable: bool = True) -> ConversionController:
        """Create and (optionally) enable the controller for *document*.

        Raises ``ValueError`` if the document already has one.
        """
        if id(document) in self._controllers:
            raise ValueError("Document already has a conversion controller")
        controller = ConversionController(
            document,
            self._engine_factory(document),
            pattern=self.config.get('token_pattern'),
            convert_key=self.config.get('convert_key'),
            cancel_key=self.config.get('cancel_key'),
            disable_policy=self.config.get('disable_policy'),
            event_bus=self.event_bus,
            i18n=self.i18n,
            debug=self.debug,
        )
        self._controllers[id(document)] = controller
        if enable:
            controller.enable()
        logger.debug("Attached controller to document %#x", id(document))
        return controller

    def detach(self, document: IDocumentAdapter) -> None:
        """Disable and forget the controller for *document* (no-op if none)."""
        controller = self._controllers.pop(id(document), None)
        if controller is None:
            return
        controller.disable()
        logger.debug("Detached controller from document %#x", id(document))

    def controller_for(self, document: IDocumentAdapter) -> ConversionController | None:
        return self._controllers.get(id(document))

    def shutdown(self) -> None:
        for controller in list(self._controllers.values()):
            controller.disable()
        self._controllers.clear()
        self.event_bus.clear()
