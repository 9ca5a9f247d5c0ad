# domain/normalizers/tables.py

"""
Tables de normalisation (phrase minuscule -> valeur canonique).

Les tables sont des constantes immuables, construites une fois au chargement
du module et injectées dans les normalizers. Lecture concurrente sans verrou.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class NormalizationTable:
    """
    Table de correspondance en lecture seule.

    - name    : nom logique (pour les logs)
    - entries : phrase (minuscule, sans espaces de bord) -> valeur canonique
    """

    name: str
    entries: Mapping[str, str]
    _by_length: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cleaned = {key.strip().lower(): value for key, value in self.entries.items()}
        object.__setattr__(self, "entries", MappingProxyType(cleaned))
        # Ordre du repli par sous-chaîne : clé la plus longue d'abord, puis ordre alphabétique.
        ordered = tuple(sorted(cleaned, key=lambda k: (-len(k), k)))
        object.__setattr__(self, "_by_length", ordered)
        logger.debug("NormalizationTable '%s' : %d entrées.", self.name, len(cleaned))

    def __contains__(self, phrase: object) -> bool:
        return isinstance(phrase, str) and phrase in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, phrase: str) -> Optional[str]:
        return self.entries.get(phrase)

    def keys_longest_first(self) -> Iterator[str]:
        return iter(self._by_length)

    def canonical_values(self) -> frozenset:
        return frozenset(self.entries.values())


COLOR_TABLE = NormalizationTable(
    name="color",
    entries={
        # Black
        "schwarz": "Black", "black": "Black", "noir": "Black", "negro": "Black",
        "nero": "Black", "zwart": "Black", "svart": "Black", "černá": "Black",
        # White
        "weiß": "White", "weiss": "White", "white": "White", "blanc": "White",
        "blanco": "White", "bianco": "White", "wit": "White", "vit": "White", "bílá": "White",
        # Red
        "rot": "Red", "red": "Red", "rouge": "Red", "rojo": "Red", "rosso": "Red",
        "rood": "Red", "röd": "Red", "červená": "Red",
        # Blue
        "blau": "Blue", "blue": "Blue", "bleu": "Blue", "azul": "Blue", "blu": "Blue",
        "blauw": "Blue", "blå": "Blue", "modrá": "Blue",
        # Green
        "grün": "Green", "green": "Green", "vert": "Green", "verde": "Green",
        "groen": "Green", "grön": "Green", "zelená": "Green",
        # Yellow
        "gelb": "Yellow", "yellow": "Yellow", "jaune": "Yellow", "amarillo": "Yellow",
        "giallo": "Yellow", "geel": "Yellow", "gul": "Yellow", "žlutá": "Yellow",
        # Orange
        "orange": "Orange", "naranja": "Orange", "arancione": "Orange",
        "oranje": "Orange", "oranžová": "Orange",
        # Purple
        "lila": "Purple", "purple": "Purple", "violet": "Purple", "morado": "Purple",
        "viola": "Purple", "paars": "Purple", "lila/purpur": "Purple", "fialová": "Purple",
        # Pink
        "rosa": "Pink", "pink": "Pink", "rose": "Pink", "roze": "Pink", "růžová": "Pink",
        # Brown
        "braun": "Brown", "brown": "Brown", "marron": "Brown", "marrón": "Brown",
        "marrone": "Brown", "bruin": "Brown", "brun": "Brown", "hnědá": "Brown",
        # Grey
        "grau": "Grey", "grey": "Grey", "gray": "Grey", "gris": "Grey",
        "grigio": "Grey", "grijs": "Grey", "grå": "Grey", "šedá": "Grey",
        # Silver
        "silber": "Silver", "silver": "Silver", "argent": "Silver", "plata": "Silver",
        "argento": "Silver", "zilver": "Silver", "stříbrná": "Silver",
        # Gold
        "gold": "Gold", "or": "Gold", "oro": "Gold", "goud": "Gold",
        "guld": "Gold", "zlatá": "Gold",
        # Bronze
        "bronze": "Bronze", "bronce": "Bronze", "bronzo": "Bronze",
        "brons": "Bronze", "bronzová": "Bronze",
        # Copper
        "kupfer": "Copper", "copper": "Copper", "cuivre": "Copper", "cobre": "Copper",
        "rame": "Copper", "koper": "Copper", "koppar": "Copper", "měď": "Copper",
        # Titanium
        "titan": "Titanium", "titanium": "Titanium", "titane": "Titanium", "titanio": "Titanium",
        # Clear
        "transparent": "Clear", "clear": "Clear", "transparente": "Clear",
        "trasparente": "Clear", "genomskinlig": "Clear", "průhledná": "Clear",
        # Multicolor
        "mehrfarbig": "Multicolor", "multicolor": "Multicolor", "multicolore": "Multicolor",
        "multicolor/mehrfarbig": "Multicolor", "flerfärgad": "Multicolor",
        "vícebarevná": "Multicolor",
    },
)


CONDITION_NEW = "new"
CONDITION_USED = "used"
CONDITION_BROKEN = "broken"
CONDITION_UNKNOWN = "unknown"

CONDITION_BUCKETS = frozenset({CONDITION_NEW, CONDITION_USED, CONDITION_BROKEN, CONDITION_UNKNOWN})

# Politique à 4 valeurs : "comme neuf", "bon" et "acceptable" sont des états d'occasion.
CONDITION_TABLE = NormalizationTable(
    name="condition",
    entries={
        # Valeurs canoniques
        "new": "new", "used": "used", "broken": "broken", "unknown": "unknown",
        # New
        "neu": "new", "neuf": "new", "nuevo": "new", "nuovo": "new", "nieuw": "new",
        "ny": "new", "nový": "new", "nowy": "new", "novo": "new",
        "nie benutzt": "new", "unbenutzt": "new", "ungetragen": "new",
        "originalverpackt": "new", "ovp": "new", "sealed": "new",
        "nagelneu": "new", "brandneu": "new", "brand new": "new",
        "neu und unbenutzt": "new", "neu und originalverpackt": "new",
        # Used (comme neuf)
        "neuwertig": "used", "wie neu": "used", "like new": "used", "like_new": "used",
        "comme neuf": "used", "como nuevo": "used", "come nuovo": "used",
        "als nieuw": "used", "som ny": "used", "jako nový": "used", "jak nowy": "used",
        "mint": "used", "near mint": "used", "mint condition": "used",
        # Used (bon état)
        "gut": "used", "good": "used", "bon": "used", "bueno": "used", "buono": "used",
        "goed": "used", "bra": "used", "dobrý": "used", "dobry": "used",
        "sehr gut": "used", "very good": "used", "très bon": "used",
        "sehr gut erhalten": "used", "gut erhalten": "used",
        "gut erhaltene": "used", "sehr gut erhaltene": "used", "sehr gut erhaltenes": "used",
        "sehr guter zustand": "used", "guter zustand": "used",
        "top zustand": "used", "top": "used", "super zustand": "used",
        "top- und frischem zustand": "used",
        "einwandfrei": "used", "gepflegt": "used", "gepflegter": "used", "excellent": "used",
        # Used (acceptable)
        "akzeptabel": "used", "acceptable": "used", "aceptable": "used",
        "accettabile": "used", "acceptabel": "used", "redelijk": "used",
        "ok": "used", "okay": "used", "ganz okay": "used", "okka": "used", "oke": "used",
        # Used
        "gebraucht": "used", "occasion": "used", "usado": "used", "usato": "used",
        "gebruikt": "used", "begagnad": "used", "použitý": "used", "używany": "used",
        "benutzt": "used", "gebrauchsspuren": "used", "second hand": "used",
        "secondhand": "used", "second-hand": "used", "aus erster hand": "used",
        "least used": "used", "kaum getragen": "used", "wenig getragen": "used",
        "selten getragen": "used", "sehr wenig getragen": "used",
        "wenig benutzt": "used", "kaum benutzt": "used", "sehr wenig benutzt": "used",
        "kaum genutzt": "used", "kaum gebraucht": "used",
        "wenig gefahren": "used", "wenig gelaufen": "used", "kaum gelaufen": "used",
        "refurbished": "used", "generalüberholt": "used", "generalüberholtes": "used",
        "gereviseerd": "used",
        # Used (fonctionnel)
        "funktionsfähig": "used", "voll funktionsfähig": "used",
        "voll funktionsfähiger": "used", "funktionsfaehig": "used",
        "funktionstüchtig": "used", "voll funktionstüchtig": "used",
        "funktioniert": "used", "alles funktioniert": "used",
        "working": "used", "functional": "used", "einsatzbereit": "used",
        "vollständig": "used", "komplett": "used", "trocken": "used",
        "unfallfrei": "used", "keine mängel": "used",
        "voll funktionsfähig, keine mängel": "used",
        "unfallfrei und hat keinerlei mängel": "used",
        # Broken
        "defekt": "broken", "defect": "broken", "défectueux": "broken",
        "defectuoso": "broken", "difettoso": "broken", "uszkodzony": "broken",
        "trasig": "broken", "kapot": "broken", "kaputt": "broken",
        "beschädigt": "broken", "beschädigt, unfallfahrzeug": "broken",
        "unfallfahrzeug": "broken", "for parts": "broken", "for_parts": "broken",
        "bastler": "broken", "bastler/export": "broken",
        "nicht fahrtüchtig": "broken", "nicht funktionsfähig": "broken",
    },
)

# Sous-chaînes indiquant qu'une valeur libre décrit bien un état.
CONDITION_KEYWORDS: Tuple[str, ...] = (
    "new", "neu", "neuf", "nuevo", "nuovo", "nieuw",
    "used", "gebraucht", "occasion", "usado", "usato", "gebruikt",
    "broken", "defekt", "kaputt", "kapot", "trasig",
    "good", "gut", "bon", "bueno", "buono", "goed",
    "fair", "ok", "okay", "akzeptabel",
    "like new", "wie neu", "mint", "excellent", "sehr gut",
    "refurbished", "generalüberholt", "gereviseerd",
    "funktionsfähig", "funktioniert", "working", "functional",
    "funktionstüchtig", "funktionsfaehig",
    "einsatzbereit", "secondhand", "second-hand",
    "unbenutzt", "ungetragen", "fahrtüchtig",
    "mängel", "zustand", "erhalten", "gepflegt",
)
