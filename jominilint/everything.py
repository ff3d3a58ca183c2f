"""The whole project under analysis: every loaded definition plus the run's shared state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Final

from tqdm import tqdm

from jominilint.block.model import Assignment, Block, Definition, Keyword
from jominilint.block.token import FileKind, Token
from jominilint.config import LintConfig
from jominilint.context import ScopeContext
from jominilint.data.character_templates import CharacterTemplate
from jominilint.data.decisions import Decision
from jominilint.data.modifiers import Modifier
from jominilint.data.regions import Area, Region
from jominilint.data.scripted_effects import ScriptedEffect
from jominilint.data.scripted_triggers import ScriptedTrigger
from jominilint.data.scriptvalues import ScriptValues
from jominilint.data.traits import Trait
from jominilint.db import Db, DbKind
from jominilint.diagnostics.codes import (
    DEFINITION_UNEXPECTED_TOKEN,
    DEFINITION_UNKNOWN_SETTING,
    FILE_MISSING,
    ITEM_MISSING,
)
from jominilint.diagnostics.sink import DiagnosticSink
from jominilint.fileset import AssetLookupStatus, AssetRegistry, Fileset, normalize_path
from jominilint.item import Item
from jominilint.localization import LOCALIZATION_DIR, Localization
from jominilint.parser.options import ParserOptions
from jominilint.parser.parse import parse_file, parse_text
from jominilint.scopes import Scopes

logger = logging.getLogger(__name__)

type ItemLoader = Callable[[Db, Token, Block], None]

LOADERS: Final[dict[Item, ItemLoader]] = {
    Item.SCRIPTED_TRIGGER: ScriptedTrigger.add,
    Item.SCRIPTED_EFFECT: ScriptedEffect.add,
    Item.DECISION: Decision.add,
    Item.CHARACTER_TEMPLATE: CharacterTemplate.add,
    Item.TRAIT: Trait.add,
    Item.MODIFIER: Modifier.add,
    Item.REGION: Region.add,
    Item.AREA: Area.add,
}

# Script values have their own store, but are read from files like the rest.
LOADED_ITEMS: Final[tuple[Item, ...]] = (Item.SCRIPT_VALUE, *LOADERS)


class Everything:
    """Aggregates what validation needs.

    Use `load_fileset` (or `load_texts` for in-memory files) first, then
    `validate_all`. Every finding goes to `sink`.
    """

    def __init__(
        self,
        *,
        sink: DiagnosticSink | None = None,
        config: LintConfig | None = None,
        fileset: Fileset | None = None,
        assets: AssetRegistry | None = None,
    ) -> None:
        self.sink = sink if sink is not None else DiagnosticSink()
        self.config = config if config is not None else LintConfig()
        self.fileset = fileset if fileset is not None else Fileset()
        self.assets: AssetRegistry = assets if assets is not None else self.fileset
        self.localization = Localization(self.sink)
        self.db = Db(self.sink)
        self.script_values = ScriptValues(self.sink, dict(self.config.scope_override))
        self.parser_options = ParserOptions.for_mode(self.config.parse_mode)

    # -------------------------
    # Loading
    # -------------------------

    def load_fileset(self, *, show_progress: bool = False) -> None:
        """Parse and register every definition file the fileset holds."""
        self.localization.load_fileset(self.fileset)
        work = [(item, entry) for item in LOADED_ITEMS for entry in self.fileset.get_files_under(item.path)]
        for item, entry in tqdm(work, desc="loading", unit="file", disable=not show_progress):
            block = parse_file(entry, self.sink, self.parser_options)
            if block is not None:
                self.load_block(item, block)
        self._log_counts()

    def load_texts(self, texts: Mapping[str, str], kind: FileKind = FileKind.MOD) -> None:
        """Load in-memory files keyed by their path relative to a game or mod root."""
        for raw_path, text in texts.items():
            path = normalize_path(raw_path)
            if path.startswith(f"{LOCALIZATION_DIR}/") and path.endswith(".yml"):
                self.localization.load_text(text, path=path, kind=kind)
                continue
            item = item_for_path(path)
            if item is None:
                logger.debug("no loader for %s", path)
                continue
            self.load_block(item, parse_text(text, path=path, kind=kind, sink=self.sink, options=self.parser_options))
        self._log_counts()

    def load_block(self, item: Item, block: Block) -> None:
        """Register the top-level definitions of one parsed file."""
        for definition in block.iter_definitions():
            match definition:
                case Keyword(token=token):
                    self.sink.report(DEFINITION_UNEXPECTED_TOKEN, token)
                case Assignment(key=key) if key.starts_with("@"):
                    # Local constants, resolved by the game at load time.
                    continue
                case Assignment(key=key, value=value):
                    if item is Item.SCRIPT_VALUE:
                        self.script_values.load_item(key, value)
                    else:
                        self.sink.report(DEFINITION_UNKNOWN_SETTING, key, item=item.label)
                case Definition(key=key, block=body):
                    if item is Item.SCRIPT_VALUE:
                        self.script_values.load_item(key, body)
                    else:
                        LOADERS[item](self.db, key, body)

    def _log_counts(self) -> None:
        logger.info("loaded %d script values", len(self.script_values))
        for item in LOADERS:
            count = self.db.count(item)
            if count:
                logger.info("loaded %d %ss", count, item.label)

    # -------------------------
    # Registry
    # -------------------------

    def add(self, item: Item, key: Token, block: Block, kind: DbKind) -> None:
        self.db.add(item, key, block, kind)

    def exists(self, item: Item, name: str) -> bool:
        match item:
            case Item.SCRIPT_VALUE:
                return self.script_values.exists(name)
            case Item.LOCALIZATION:
                return self.localization.exists(name)
            case Item.FILE:
                return self.assets.lookup(name).status is AssetLookupStatus.FOUND
            case _:
                return self.db.exists(item, name)

    def verify_exists(self, item: Item, token: Token) -> None:
        """Report a reference to an undefined item. Kinds that are never loaded are not checked."""
        match item:
            case Item.LOCALIZATION:
                self.localization.verify_exists(token)
            case Item.FILE:
                lookup = self.assets.lookup(token.text)
                if lookup.status is AssetLookupStatus.MISSING:
                    self.sink.report(FILE_MISSING, token, name=lookup.normalized_path)
            case _ if item in LOADED_ITEMS:
                if not self.exists(item, token.text):
                    self.sink.report(ITEM_MISSING, token, item=item.label, name=token.text)

    def validate_call(self, item: Item, key: Token, sc: ScopeContext) -> None:
        """Validate the definition `key` names in the caller's context."""
        if item is Item.SCRIPT_VALUE:
            self.script_values.validate_call(key, self, sc)
        else:
            self.db.validate_call(item, key, self, sc)

    def new_context(self, root: Scopes, token: Token) -> ScopeContext:
        """A context for a top-level entry point such as a decision's triggers."""
        return ScopeContext(root, token, self.sink, strict=self.config.strict_scopes)

    # -------------------------
    # Validation
    # -------------------------

    def validate_all(self, *, show_progress: bool = False) -> None:
        entries = list(self.db.iter_entries())
        for entry in tqdm(entries, desc="validating", unit="item", disable=not show_progress):
            entry.kind.validate(entry.key, entry.block, self)
        self.script_values.validate(self)


def item_for_path(path: str) -> Item | None:
    """The loaded item kind whose directory holds `path`, if any."""
    if not path.endswith(".txt"):
        return None
    for item in LOADED_ITEMS:
        if path.startswith(item.path):
            return item
    return None


__all__ = ["LOADED_ITEMS", "LOADERS", "Everything", "ItemLoader", "item_for_path"]
