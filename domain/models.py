# domain/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True, eq=False)
class CategoryNode:
    """
    Noeud de l'arbre des catégories unifiées.

    - slug                        : identifiant machine, indépendant de la langue
    - label                       : libellé affichable
    - attribute_extraction_prompt : consigne d'extraction d'attributs (optionnelle)
    - attributes                  : nom d'attribut -> valeur d'exemple (optionnel)
    - children                    : sous-catégories, dans l'ordre du document

    Le noeud possède ses enfants (arbre, pas de partage entre parents).
    Egalité et hash par identité : un noeud n'existe qu'une fois dans l'arbre.
    """

    slug: str
    label: str
    attribute_extraction_prompt: Optional[str] = None
    attributes: Optional[Mapping[str, str]] = None
    children: Tuple["CategoryNode", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.attributes is not None and not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def matches(self, segment: str) -> bool:
        """Vrai si le segment correspond au slug OU au libellé (sans casse)."""
        needle = segment.casefold()
        return self.slug.casefold() == needle or self.label.casefold() == needle


@dataclass(frozen=True)
class CategoryEntry:
    """Ligne de l'aplatissement de l'arbre : chemin de slugs, libellés, prompt."""

    path: Tuple[str, ...]
    labels: Tuple[str, ...]
    attribute_extraction_prompt: Optional[str] = None
