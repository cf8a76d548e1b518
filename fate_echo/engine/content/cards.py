"""
Tarot Card Definitions - The 78-card catalogue shared with the settlement contract.

Card layout matches FateEcho.sol card ids:
- 22 Major Arcana (id  0 - 21) - "event" cards with a fixed damage or heal effect
- 56 Minor Arcana (id 22 - 77) - "combat" cards with a suit and a rank

Every attribute is a pure function of the id:
- Event effect kind:       id % 2            (0 = damage, 1 = heal)
- Event effect magnitude:  5 + (id * 3) % 16
- Combat suit:             (id - 22) // 14   (Wands, Cups, Swords, Pentacles)
- Combat rank:             (id - 22) % 14 + 1

The deck is built once at import time and never mutated.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from enum import Enum


# =============================================================================
# CONSTANTS - Values from the settlement contract
# =============================================================================

MAX_HP = 30
TOTAL_ROUNDS = 5
COUNTER_BONUS = 3

DECK_SIZE = 78
EVENT_CARD_COUNT = 22
COMBAT_CARD_COUNT = DECK_SIZE - EVENT_CARD_COUNT
RANKS_PER_SUIT = 14


class CardCategory(Enum):
    """Card categories. Values match the frontend naming."""
    EVENT = "major"
    COMBAT = "minor"


class Suit(Enum):
    """Minor Arcana suits in contract enum order."""
    WANDS = 0
    CUPS = 1
    SWORDS = 2
    PENTACLES = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def element(self) -> str:
        return SUIT_ELEMENTS[self]


class EffectKind(Enum):
    """Major Arcana effect kind (contract: cardId % 2)."""
    DAMAGE = 0
    HEAL = 1


SUIT_ELEMENTS: Dict[Suit, str] = {
    Suit.WANDS: "Fire",
    Suit.CUPS: "Water",
    Suit.SWORDS: "Air",
    Suit.PENTACLES: "Earth",
}

# Elemental cycle: key counters value
# Fire > Earth > Air > Water > Fire
COUNTER_MAP: Dict[Suit, Suit] = {
    Suit.WANDS: Suit.PENTACLES,
    Suit.PENTACLES: Suit.SWORDS,
    Suit.SWORDS: Suit.CUPS,
    Suit.CUPS: Suit.WANDS,
}


def beats(attacker: Suit, defender: Suit) -> bool:
    """True if attacker's suit counters defender's suit."""
    return COUNTER_MAP[attacker] is defender


# =============================================================================
# CARD
# =============================================================================

@dataclass(frozen=True)
class Card:
    """A single tarot card. Immutable; shared by every battle."""
    id: int
    category: CardCategory
    name: str
    image: str

    # Combat (Minor Arcana) only
    suit: Optional[Suit] = None
    rank: Optional[int] = None

    # Event (Major Arcana) only
    effect_kind: Optional[EffectKind] = None
    effect_magnitude: Optional[int] = None
    description: str = ""

    @property
    def is_event(self) -> bool:
        return self.category is CardCategory.EVENT

    @property
    def is_combat(self) -> bool:
        return self.category is CardCategory.COMBAT

    @property
    def element(self) -> Optional[str]:
        return self.suit.element if self.suit is not None else None

    def to_dict(self) -> dict:
        """JSON-serializable form."""
        data = {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "image": self.image,
        }
        if self.is_combat:
            data["suit"] = self.suit.label
            data["element"] = self.element
            data["rank"] = self.rank
        else:
            data["effect_kind"] = self.effect_kind.name.lower()
            data["effect_magnitude"] = self.effect_magnitude
            data["description"] = self.description
        return data


# =============================================================================
# CARD ATTRIBUTE FORMULAS (contract-exact)
# =============================================================================

def is_event_card(card_id: int) -> bool:
    """Contract: cardId < 22"""
    return card_id < EVENT_CARD_COUNT


def event_effect_kind(card_id: int) -> EffectKind:
    """Contract: _getMajorEffect - cardId % 2"""
    return EffectKind(card_id % 2)


def event_effect_magnitude(card_id: int) -> int:
    """Contract: _getMajorValue - 5 + (cardId * 3) % 16"""
    return 5 + (card_id * 3) % 16


def combat_rank(card_id: int) -> int:
    """Contract: ((cardId - 22) % 14) + 1"""
    return (card_id - EVENT_CARD_COUNT) % RANKS_PER_SUIT + 1


def combat_suit(card_id: int) -> Suit:
    """Contract: Suit((cardId - 22) / 14)"""
    return Suit((card_id - EVENT_CARD_COUNT) // RANKS_PER_SUIT)


# =============================================================================
# DISPLAY DATA
# =============================================================================

# (name, image filename stem)
MAJOR_ARCANA: List[Tuple[str, str]] = [
    ("The Fool", "00-TheFool"),
    ("The Magician", "01-TheMagician"),
    ("The High Priestess", "02-TheHighPriestess"),
    ("The Empress", "03-TheEmpress"),
    ("The Emperor", "04-TheEmperor"),
    ("The Hierophant", "05-TheHierophant"),
    ("The Lovers", "06-TheLovers"),
    ("The Chariot", "07-TheChariot"),
    ("Strength", "08-Strength"),
    ("The Hermit", "09-TheHermit"),
    ("Wheel of Fortune", "10-WheelOfFortune"),
    ("Justice", "11-Justice"),
    ("The Hanged Man", "12-TheHangedMan"),
    ("Death", "13-Death"),
    ("Temperance", "14-Temperance"),
    ("The Devil", "15-TheDevil"),
    ("The Tower", "16-TheTower"),
    ("The Star", "17-TheStar"),
    ("The Moon", "18-TheMoon"),
    ("The Sun", "19-TheSun"),
    ("Judgement", "20-Judgement"),
    ("The World", "21-TheWorld"),
]

# Flavor lead-ins for the effect description, indexed by card id
MAJOR_FLAVOR: List[str] = [
    "The Fool opens the void",
    "Arcane restoration",
    "Foresight pierces",
    "Nature's embrace",
    "Imperial decree",
    "Divine blessing",
    "Love's arrow",
    "Victorious charge",
    "Mighty strike",
    "Hermit's wisdom",
    "Fate's reckoning",
    "Balanced scales",
    "Suspended sacrifice",
    "Death's renewal",
    "Tempered blade",
    "Dark pact heals",
    "Tower crashes",
    "Star's light",
    "Lunar illusion",
    "Solar radiance",
    "Final judgement",
    "World's harmony",
]

RANK_NAMES: Dict[int, str] = {
    1: "Ace",
    2: "II",
    3: "III",
    4: "IV",
    5: "V",
    6: "VI",
    7: "VII",
    8: "VIII",
    9: "IX",
    10: "X",
    11: "Page",
    12: "Knight",
    13: "Queen",
    14: "King",
}


# =============================================================================
# DECK CONSTRUCTION
# =============================================================================

def _build_event_card(card_id: int) -> Card:
    name, filename = MAJOR_ARCANA[card_id]
    kind = event_effect_kind(card_id)
    magnitude = event_effect_magnitude(card_id)
    if kind is EffectKind.DAMAGE:
        action = f"Deal {magnitude} damage"
    else:
        action = f"Heal {magnitude} HP"
    return Card(
        id=card_id,
        category=CardCategory.EVENT,
        name=name,
        image=f"/cards/{filename}.png",
        effect_kind=kind,
        effect_magnitude=magnitude,
        description=f"{MAJOR_FLAVOR[card_id]} - {action}",
    )


def _build_combat_card(card_id: int) -> Card:
    suit = combat_suit(card_id)
    rank = combat_rank(card_id)
    return Card(
        id=card_id,
        category=CardCategory.COMBAT,
        name=f"{RANK_NAMES[rank]} of {suit.label}",
        image=f"/cards/{suit.label}{rank:02d}.png",
        suit=suit,
        rank=rank,
    )


def build_deck() -> Tuple[Card, ...]:
    """Build the full 78-card deck, indexed by card id."""
    cards = [_build_event_card(i) for i in range(EVENT_CARD_COUNT)]
    cards.extend(_build_combat_card(i) for i in range(EVENT_CARD_COUNT, DECK_SIZE))
    return tuple(cards)


FULL_DECK: Tuple[Card, ...] = build_deck()

EVENT_CARDS: Tuple[Card, ...] = tuple(c for c in FULL_DECK if c.is_event)
COMBAT_CARDS: Tuple[Card, ...] = tuple(c for c in FULL_DECK if c.is_combat)


def get_card(card_id: int) -> Card:
    """Look up a card by id."""
    if not 0 <= card_id < DECK_SIZE:
        raise ValueError(f"card id must be in [0, {DECK_SIZE}), got {card_id}")
    return FULL_DECK[card_id]


def get_cards_by_suit(suit: Suit) -> List[Card]:
    """All 14 combat cards of a suit, ordered by rank."""
    return [c for c in COMBAT_CARDS if c.suit is suit]
