# domain/category_catalog.py

"""
Catalogue hiérarchique des catégories unifiées.

Le catalogue est construit une seule fois à partir d'un document versionné
(JSON) puis figé : aucune API de mise à jour. Il sert à :
- résoudre un slug en chemin complet (["elektronik", "netzwerk"])
- récupérer le prompt / les attributs d'extraction d'un chemin
- aplatir l'arbre pour les écrans de filtre et l'indexation
- tester l'appartenance d'un chemin à un filtre (préfixe)
"""

from __future__ import annotations

import logging
import threading
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from jsonschema import ValidationError, validate

from config.log_config import SUCCESS_LEVEL
from config.settings import DEFAULT_MAX_DEPTH, MAX_SUPPORTED_DEPTH, Settings
from domain.json_utils import JsonDocument, parse_json_document
from domain.models import CategoryEntry, CategoryNode

logger = logging.getLogger(__name__)

SUPPORTED_MARKETPLACE_KEYS: Tuple[str, ...] = (
    "kleinanzeigen.de",
    "willhaben.at",
    "marktplaats.nl",
    "leboncoin.fr",
)

# Les noms de champs du document sont comparés sans tenir compte de la casse.
_ROOT_FIELDS = {
    "version": "version",
    "defaultlanguage": "defaultLanguage",
    "categories": "categories",
}
_CATEGORY_FIELDS = {
    "slug": "slug",
    "label": "label",
    "attributeextractionprompt": "attributeExtractionPrompt",
    "subcategories": "subCategories",
    "attributes": "attributes",
}

CATEGORY_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "version": {"type": ["string", "null"]},
        "defaultLanguage": {"type": ["string", "null"]},
        "categories": {
            "type": "array",
            "items": {"$ref": "#/$defs/category"},
            "minItems": 1,
        },
    },
    "required": ["categories"],
    "$defs": {
        "category": {
            "type": "object",
            "properties": {
                "slug": {"type": "string", "minLength": 1},
                "label": {"type": "string"},
                "attributeExtractionPrompt": {"type": ["string", "null"]},
                "subCategories": {
                    "type": ["array", "null"],
                    "items": {"$ref": "#/$defs/category"},
                },
                "attributes": {
                    "type": ["object", "null"],
                    "additionalProperties": {"type": "string"},
                },
            },
            "required": ["slug", "label"],
        },
    },
}


class CategoryDocumentError(ValueError):
    """Document de catégories absent, illisible ou incohérent (erreur fatale au démarrage)."""


def _canonical_keys(data: Mapping[str, Any], fields: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = fields.get(str(key).lower(), key)
        out[name] = value
    return out


def _canonicalize_category(raw: Any, depth: int, max_depth: int) -> Any:
    if depth > max_depth:
        raise CategoryDocumentError(
            f"Profondeur maximale de l'arbre dépassée ({max_depth})."
        )
    if not isinstance(raw, Mapping):
        # laissé tel quel : la validation JSON Schema le rejettera
        return raw

    node = _canonical_keys(raw, _CATEGORY_FIELDS)
    subs = node.get("subCategories")
    if isinstance(subs, list):
        node["subCategories"] = [
            _canonicalize_category(sub, depth + 1, max_depth) for sub in subs
        ]
    return node


def category_matches(filter_path: Sequence[str], candidate_path: Sequence[str]) -> bool:
    """
    Vrai si `filter_path` est un préfixe (sans casse) de `candidate_path`.
    Un filtre vide correspond à tout chemin.
    """
    if len(filter_path) > len(candidate_path):
        return False
    for wanted, actual in zip(filter_path, candidate_path):
        if wanted.casefold() != actual.casefold():
            return False
    return True


class CategoryCatalog:
    """
    Index en mémoire de l'arbre des catégories.

    Construire via `CategoryCatalog.load(document)`. Une fois construit, le
    catalogue est immuable et peut être lu depuis plusieurs threads sans verrou.
    """

    def __init__(
        self,
        roots: Sequence[CategoryNode],
        *,
        version: Optional[str] = None,
        default_language: Optional[str] = None,
        reject_duplicate_slugs: bool = False,
    ) -> None:
        self._roots: Tuple[CategoryNode, ...] = tuple(roots)
        self._version = version
        self._default_language = default_language
        self._slug_index: Dict[str, CategoryNode] = {}

        for root in self._roots:
            self._register(root, reject_duplicate_slugs)

        logger.debug(
            "CategoryCatalog: %d racines, %d slugs indexés.",
            len(self._roots),
            len(self._slug_index),
        )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def load(
        cls,
        document: JsonDocument,
        *,
        reject_duplicate_slugs: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> "CategoryCatalog":
        """
        Construit le catalogue depuis le document versionné.

        Lève CategoryDocumentError si le document est vide, n'est pas du JSON
        valide, ne respecte pas CATEGORY_DOCUMENT_SCHEMA, dépasse `max_depth`
        ou contient des slugs dupliqués alors que `reject_duplicate_slugs` est actif.
        `max_depth` est ramené à MAX_SUPPORTED_DEPTH s'il le dépasse.
        """
        if max_depth > MAX_SUPPORTED_DEPTH:
            logger.warning(
                "max_depth=%d ramené au plafond supporté (%d).", max_depth, MAX_SUPPORTED_DEPTH
            )
            max_depth = MAX_SUPPORTED_DEPTH

        try:
            raw = parse_json_document(document)
        except ValueError as exc:
            logger.error("Document de catégories illisible: %s", exc)
            raise CategoryDocumentError(f"Document de catégories illisible: {exc}") from exc

        payload = _canonical_keys(raw, _ROOT_FIELDS)
        categories = payload.get("categories")
        if isinstance(categories, list):
            payload["categories"] = [
                _canonicalize_category(cat, 1, max_depth) for cat in categories
            ]

        try:
            validate(instance=payload, schema=CATEGORY_DOCUMENT_SCHEMA)
        except ValidationError as exc:
            location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            logger.error("Document de catégories non conforme (%s): %s", location, exc.message)
            raise CategoryDocumentError(
                f"Document de catégories non conforme ({location}): {exc.message}"
            ) from exc
        except RecursionError as exc:
            logger.error("Document de catégories trop profond pour la validation.")
            raise CategoryDocumentError("Document de catégories trop profond pour la validation.") from exc

        roots = [cls._build_node(cat) for cat in payload["categories"]]
        catalog = cls(
            roots,
            version=payload.get("version"),
            default_language=payload.get("defaultLanguage"),
            reject_duplicate_slugs=reject_duplicate_slugs,
        )
        logger.log(
            SUCCESS_LEVEL,
            "Catalogue de catégories chargé (version=%s, langue=%s, %d catégories).",
            catalog.version,
            catalog.default_language,
            len(catalog),
        )
        return catalog

    @classmethod
    def _build_node(cls, data: Mapping[str, Any]) -> CategoryNode:
        children = tuple(cls._build_node(sub) for sub in data.get("subCategories") or [])
        return CategoryNode(
            slug=data["slug"],
            label=data["label"],
            attribute_extraction_prompt=data.get("attributeExtractionPrompt"),
            attributes=data.get("attributes"),
            children=children,
        )

    def _register(self, node: CategoryNode, reject_duplicates: bool) -> None:
        key = node.slug.casefold()
        if key in self._slug_index:
            if reject_duplicates:
                logger.error("Slug dupliqué dans le document de catégories: %s", node.slug)
                raise CategoryDocumentError(f"Slug dupliqué: {node.slug!r}")
            logger.warning(
                "Slug dupliqué '%s' : le dernier noeud enregistré remplace le précédent.",
                node.slug,
            )
        self._slug_index[key] = node
        for child in node.children:
            self._register(child, reject_duplicates)

    # ------------------------------------------------------------------ #
    # Métadonnées
    # ------------------------------------------------------------------ #

    @property
    def version(self) -> Optional[str]:
        return self._version

    @property
    def default_language(self) -> Optional[str]:
        return self._default_language

    def __len__(self) -> int:
        return sum(1 for _ in self.get_all_categories())

    @staticmethod
    def get_supported_marketplace_keys() -> Tuple[str, ...]:
        return SUPPORTED_MARKETPLACE_KEYS

    # ------------------------------------------------------------------ #
    # Résolution
    # ------------------------------------------------------------------ #

    def resolve_category_path(self, slug: Optional[str]) -> Optional[List[str]]:
        """
        Résout un slug en chemin complet depuis la racine.
        Ex: "netzwerk" -> ["elektronik", "netzwerk"]. None si inconnu.

        En cas de slug dupliqué, le premier noeud rencontré en pré-ordre l'emporte.
        """
        if not slug or slug.casefold() not in self._slug_index:
            return None

        target = slug.casefold()

        def _search(nodes: Sequence[CategoryNode], prefix: List[str]) -> Optional[List[str]]:
            for node in nodes:
                path = prefix + [node.slug]
                if node.slug.casefold() == target:
                    return path
                found = _search(node.children, path)
                if found is not None:
                    return found
            return None

        return _search(self._roots, [])

    def _walk(self, path: Sequence[str]) -> Optional[CategoryNode]:
        if not path:
            return None

        current: Optional[CategoryNode] = None
        candidates: Sequence[CategoryNode] = self._roots
        for segment in path:
            current = next((node for node in candidates if node.matches(segment)), None)
            if current is None:
                logger.debug("Segment de catégorie introuvable: %r (chemin=%s)", segment, list(path))
                return None
            candidates = current.children
        return current

    def get_attribute_extraction_prompt(self, path: Sequence[str]) -> Optional[str]:
        """Prompt d'extraction du noeud désigné par `path` (slugs ou libellés)."""
        node = self._walk(path)
        return node.attribute_extraction_prompt if node else None

    def get_attributes_to_extract(self, path: Sequence[str]) -> Optional[Dict[str, str]]:
        """Attributs à extraire (nom -> valeur d'exemple) pour `path`."""
        node = self._walk(path)
        if node is None or node.attributes is None:
            return None
        return dict(node.attributes)

    # ------------------------------------------------------------------ #
    # Accès structurel
    # ------------------------------------------------------------------ #

    def get_category(self, slug: Optional[str]) -> Optional[CategoryNode]:
        if not slug:
            return None
        return self._slug_index.get(slug.casefold())

    def get_top_level_categories(self) -> Tuple[CategoryNode, ...]:
        return self._roots

    def get_sub_categories(self, parent_slug: Optional[str]) -> Optional[Tuple[CategoryNode, ...]]:
        parent = self.get_category(parent_slug)
        return parent.children if parent else None

    def get_all_categories(self) -> Iterator[CategoryEntry]:
        """
        Aplatissement pré-ordre de l'arbre (parent avant enfants, enfants dans
        l'ordre du document). Chaque appel repart d'un parcours neuf.
        """

        def _traverse(
            node: CategoryNode, parent_path: Tuple[str, ...], parent_labels: Tuple[str, ...]
        ) -> Iterator[CategoryEntry]:
            path = parent_path + (node.slug,)
            labels = parent_labels + (node.label,)
            yield CategoryEntry(path, labels, node.attribute_extraction_prompt)
            for child in node.children:
                yield from _traverse(child, path, labels)

        for root in self._roots:
            yield from _traverse(root, (), ())

    @staticmethod
    def category_matches(filter_path: Sequence[str], candidate_path: Sequence[str]) -> bool:
        return category_matches(filter_path, candidate_path)


class SharedCatalog:
    """
    Catalogue partagé construit une seule fois, au premier accès.

    Les accès concurrents au premier `get()` convergent vers une seule
    construction ; ensuite la lecture se fait sans verrou.
    """

    def __init__(
        self,
        document_provider: Callable[[], JsonDocument],
        **load_options: Any,
    ) -> None:
        self._provider = document_provider
        self._load_options = load_options
        self._catalog: Optional[CategoryCatalog] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, document_provider: Callable[[], JsonDocument]
    ) -> "SharedCatalog":
        """Catalogue partagé configuré par `Settings.catalog_options()`."""
        return cls(document_provider, **settings.catalog_options())

    @property
    def is_loaded(self) -> bool:
        return self._catalog is not None

    def get(self) -> CategoryCatalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog

        with self._lock:
            if self._catalog is None:
                logger.debug("SharedCatalog: première construction du catalogue.")
                try:
                    document = self._provider()
                except OSError as exc:
                    logger.critical("Impossible de lire le document de catégories: %s", exc)
                    raise CategoryDocumentError(
                        f"Document de catégories introuvable: {exc}"
                    ) from exc
                self._catalog = CategoryCatalog.load(document, **self._load_options)
            return self._catalog
