"""
Query Models

Dataclasses for filter criteria (NeuronQuery) and decoded results
(QueryResult, Neuron, Terminal).

Results are transient views built fresh per response. The server speaks
PascalCase JSON ("Id", "Tag", "PresynapticNeuronId"); decoding also accepts
camelCase and snake_case keys.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class RelativeType(Enum):
    """Relationship direction that defines a relative of a central neuron."""
    NOT_SET = "NotSet"
    PRESYNAPTIC = "Presynaptic"
    POSTSYNAPTIC = "Postsynaptic"

    @classmethod
    def parse(cls, value) -> "RelativeType":
        """Accept an enum member, its wire name or its Python name."""
        if value is None:
            return cls.NOT_SET
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown relative type: {value}")


# Wire name -> attribute name, in serialization order
QUERY_FIELDS = (
    ("Id", "id"),
    ("IdNot", "id_not"),
    ("TagContains", "tag_contains"),
    ("TagContainsNot", "tag_contains_not"),
    ("Presynaptic", "presynaptic"),
    ("PresynapticNot", "presynaptic_not"),
    ("Postsynaptic", "postsynaptic"),
    ("PostsynapticNot", "postsynaptic_not"),
)


def _unique(values: Optional[Iterable[str]]) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    seen = []
    for value in values:
        value = str(value)
        if value not in seen:
            seen.append(value)
    return seen


@dataclass
class NeuronQuery:
    """
    Filter specification for neuron and terminal queries.

    Every set-valued field is optional; an empty field means no filter on
    that dimension. Duplicates are dropped, first-seen order is kept so the
    serialized query string is stable.

    Usage:
        query = NeuronQuery(tag_contains=["cat", "dog"], limit=50)
    """
    id: List[str] = field(default_factory=list)
    id_not: List[str] = field(default_factory=list)
    tag_contains: List[str] = field(default_factory=list)
    tag_contains_not: List[str] = field(default_factory=list)
    presynaptic: List[str] = field(default_factory=list)
    presynaptic_not: List[str] = field(default_factory=list)
    postsynaptic: List[str] = field(default_factory=list)
    postsynaptic_not: List[str] = field(default_factory=list)
    limit: Optional[int] = None

    def __post_init__(self):
        for _, attr in QUERY_FIELDS:
            setattr(self, attr, _unique(getattr(self, attr)))
        if self.limit is not None:
            self.limit = int(self.limit)
            if self.limit < 0:
                raise ValueError(f"limit must be non-negative, got {self.limit}")

    def is_empty(self) -> bool:
        """True when no filter and no limit is set."""
        return self.limit is None and not any(getattr(self, attr) for _, attr in QUERY_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        d = {wire: list(getattr(self, attr)) for wire, attr in QUERY_FIELDS if getattr(self, attr)}
        if self.limit is not None:
            d["Limit"] = self.limit
        return d

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "NeuronQuery":
        """Build from wire names ("TagContains") or snake_case ("tag_contains")."""
        if not d:
            return cls()
        kwargs = {}
        for wire, attr in QUERY_FIELDS:
            value = _lookup(d, wire, attr)
            if value is not None:
                kwargs[attr] = value
        limit = _lookup(d, "Limit", "limit")
        if limit is not None:
            kwargs["limit"] = limit
        return cls(**kwargs)


def _lookup(d: Dict[str, Any], *names: str) -> Any:
    """Return the first key present, trying each name and its camelCase form."""
    for name in names:
        for key in (name, name[:1].lower() + name[1:]):
            if key in d:
                return d[key]
    return None


def _take(d: Dict[str, Any], consumed: set, *names: str) -> Any:
    for name in names:
        for key in (name, name[:1].lower() + name[1:]):
            if key in d:
                consumed.add(key)
                return d[key]
    return None


@dataclass
class Terminal:
    """A directed relationship from a presynaptic to a postsynaptic neuron."""
    id: Optional[str] = None
    presynaptic_neuron_id: Optional[str] = None
    postsynaptic_neuron_id: Optional[str] = None
    tag: Optional[str] = None
    effect: Optional[str] = None
    strength: Optional[str] = None
    version: Optional[int] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Terminal":
        consumed = set()
        terminal = cls(
            id=_take(d, consumed, "Id"),
            presynaptic_neuron_id=_take(d, consumed, "PresynapticNeuronId", "presynaptic_neuron_id"),
            postsynaptic_neuron_id=_take(d, consumed, "PostsynapticNeuronId", "postsynaptic_neuron_id"),
            tag=_take(d, consumed, "Tag"),
            effect=_take(d, consumed, "Effect"),
            strength=_take(d, consumed, "Strength"),
            version=_take(d, consumed, "Version"),
        )
        terminal.attributes = {k: v for k, v in d.items() if k not in consumed}
        return terminal

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.attributes)
        d.update({
            "Id": self.id,
            "PresynapticNeuronId": self.presynaptic_neuron_id,
            "PostsynapticNeuronId": self.postsynaptic_neuron_id,
            "Tag": self.tag,
            "Effect": self.effect,
            "Strength": self.strength,
            "Version": self.version,
        })
        return {k: v for k, v in d.items() if v is not None}


@dataclass
class Neuron:
    """
    A graph node.

    `terminal` is populated on relative queries: it is the terminal linking
    this neuron to the central neuron. Attributes the client does not
    interpret are kept in `attributes` untouched.
    """
    id: Optional[str] = None
    tag: Optional[str] = None
    terminal: Optional[Terminal] = None
    version: Optional[int] = None
    timestamp: Optional[str] = None
    author_id: Optional[str] = None
    author_tag: Optional[str] = None
    region_id: Optional[str] = None
    region_tag: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Neuron":
        consumed = set()
        terminal = _take(d, consumed, "Terminal")
        neuron = cls(
            id=_take(d, consumed, "Id"),
            tag=_take(d, consumed, "Tag"),
            terminal=Terminal.from_dict(terminal) if isinstance(terminal, dict) else None,
            version=_take(d, consumed, "Version"),
            timestamp=_take(d, consumed, "Timestamp"),
            author_id=_take(d, consumed, "AuthorId", "author_id"),
            author_tag=_take(d, consumed, "AuthorTag", "author_tag"),
            region_id=_take(d, consumed, "RegionId", "region_id"),
            region_tag=_take(d, consumed, "RegionTag", "region_tag"),
        )
        neuron.attributes = {k: v for k, v in d.items() if k not in consumed}
        return neuron

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.attributes)
        d.update({
            "Id": self.id,
            "Tag": self.tag,
            "Terminal": self.terminal.to_dict() if self.terminal else None,
            "Version": self.version,
            "Timestamp": self.timestamp,
            "AuthorId": self.author_id,
            "AuthorTag": self.author_tag,
            "RegionId": self.region_id,
            "RegionTag": self.region_tag,
        })
        return {k: v for k, v in d.items() if v is not None}


def _looks_like_terminal(d: Dict[str, Any]) -> bool:
    return _lookup(d, "PresynapticNeuronId", "presynaptic_neuron_id") is not None or \
        _lookup(d, "PostsynapticNeuronId", "postsynaptic_neuron_id") is not None


@dataclass
class QueryResult:
    """
    Response envelope. Neurons and terminals keep the server's order.

    `count` is the server-reported total when the envelope carries one;
    it can exceed len(neurons) when a limit was applied.
    """
    neurons: List[Neuron] = field(default_factory=list)
    terminals: List[Terminal] = field(default_factory=list)
    count: Optional[int] = None

    def __len__(self) -> int:
        return len(self.neurons) + len(self.terminals)

    def __iter__(self):
        yield from self.neurons
        yield from self.terminals

    @classmethod
    def from_json(cls, data: Any) -> "QueryResult":
        """
        Decode any response shape the service returns.

        Accepts the envelope object, a bare list of neurons or terminals,
        or a single neuron/terminal object. Raises ValueError otherwise.
        """
        if data is None:
            return cls()

        if isinstance(data, list):
            result = cls()
            for item in data:
                if not isinstance(item, dict):
                    raise ValueError(f"Unexpected item in response list: {item!r}")
                if _looks_like_terminal(item):
                    result.terminals.append(Terminal.from_dict(item))
                else:
                    result.neurons.append(Neuron.from_dict(item))
            return result

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response payload: {data!r}")

        neurons = _lookup(data, "Neurons")
        terminals = _lookup(data, "Terminals")
        if neurons is not None or terminals is not None:
            return cls(
                neurons=[Neuron.from_dict(n) for n in neurons or []],
                terminals=[Terminal.from_dict(t) for t in terminals or []],
                count=_lookup(data, "Count"),
            )

        if _looks_like_terminal(data):
            return cls(terminals=[Terminal.from_dict(data)])
        return cls(neurons=[Neuron.from_dict(data)])

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "Neurons": [n.to_dict() for n in self.neurons],
            "Terminals": [t.to_dict() for t in self.terminals],
        }
        if self.count is not None:
            d["Count"] = self.count
        return d
