from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sized
from typing import TYPE_CHECKING

from typing_extensions import override

from geomvec.base import SUPPORTED_DIMENSIONS, GeometryVector, Kind, Primitive
from geomvec.exceptions import DegenerateConstruction, DimensionMismatch, LengthMismatch, UnsupportedCombination
from geomvec.utils import is_numeric

if TYPE_CHECKING:
    from geomvec.kernel import Kernel

logger = logging.getLogger(__name__)


def promote_argument(x: object) -> object:
    """Promote a raw constructor argument to a vector of primitives where possible.

    Raw numeric input becomes a vector of exact numbers and single primitives become vectors of length 1. Everything
    else is returned unchanged.

    """
    if isinstance(x, GeometryVector):
        return x
    if isinstance(x, Primitive):
        return GeometryVector._get_collection_class(x.kind)([x])
    if is_numeric(x):
        return GeometryVector._get_collection_class(Kind.NUMBER).from_numeric(x)  # type: ignore[attr-defined]
    return x


def common_dimension(args: Iterable[object]) -> int | None:
    """The dimension shared by all arguments that have one.

    Raises:
        DimensionMismatch: If the arguments have different dimensions.

    """
    dims = {x.dim for x in args if isinstance(x, GeometryVector) and x.dim is not None}
    if len(dims) > 1:
        raise DimensionMismatch("Inputs must be of the same dimensionality")
    return dims.pop() if dims else None


def _length(x: object) -> int:
    if isinstance(x, (GeometryVector, Sized)) and not isinstance(x, (str, bytes)):
        return len(x)
    return 1


def validate_constructor_input(*args: object) -> list[object]:
    """Promote, validate and recycle the arguments of a constructor call.

    Args:
        *args: The raw arguments.

    Returns:
        The promoted arguments, all vectors broadcast to a common length. An empty list is returned if there are no
        arguments or any argument has length 0.

    Raises:
        DimensionMismatch: If the arguments have different dimensions.
        LengthMismatch: If an argument has neither length 1 nor the length of the longest argument.

    """
    inputs = [promote_argument(x) for x in args]
    common_dimension(inputs)

    lengths = [_length(x) for x in inputs]
    if len(lengths) == 0 or min(lengths) == 0:
        return []

    max_length = max(lengths)
    if any(n not in (1, max_length) for n in lengths):
        raise LengthMismatch("Inputs must be either scalar or of the same length")

    return [x.repeat_to(max_length) if isinstance(x, GeometryVector) else x for x in inputs]


class ArgumentSet:
    """The arguments of one constructor call, grouped by geometric kind.

    The order of the arguments within each kind is preserved.

    Args:
        args: The promoted arguments of the call.

    Attributes:
        unclassified: The arguments that are not geometric vectors.

    """

    def __init__(self, args: Iterable[object]) -> None:
        self._buckets: dict[Kind, list[GeometryVector]] = {kind: [] for kind in Kind}
        self.unclassified: list[object] = []
        for x in args:
            if isinstance(x, GeometryVector):
                self._buckets[x.kind].append(x)
            else:
                self.unclassified.append(x)

    def __getitem__(self, kind: Kind) -> list[GeometryVector]:
        return self._buckets[kind]

    def count(self, kind: Kind) -> int:
        return len(self._buckets[kind])

    @property
    def counts(self) -> dict[Kind, int]:
        """The number of arguments of each kind present in the call."""
        return {kind: len(v) for kind, v in self._buckets.items() if v}

    @property
    def dim(self) -> int | None:
        """The dimension of the arguments, None if only dimensionless arguments were given."""
        return common_dimension(v for bucket in self._buckets.values() for v in bucket)

    @override
    def __repr__(self) -> str:
        counts = ", ".join(f"{kind.value}={n}" for kind, n in self.counts.items())
        return f"ArgumentSet({counts}, unclassified={len(self.unclassified)})"


def classify_arguments(args: Iterable[object]) -> ArgumentSet:
    """Group promoted constructor arguments by geometric kind."""
    return ArgumentSet(promote_argument(x) for x in args)


class Signature:
    """A combination of argument kinds that a constructor knows how to handle.

    Args:
        counts: The exact number of arguments of each named kind. Arguments of kinds not named here are ignored, so
            the order of the signatures in a table decides between overlapping signatures. The kernel operation receives
            the arguments in the order of this mapping, and in call order within each kind.
        operation: The name of the kernel operation to call for each element.
        description: A short description of the arguments used in error messages, e.g. "2 points".
        dims: The dimensions in which this construction is defined.
        result_dim: The dimension of the result. By default the dimension of the arguments.

    """

    def __init__(
        self,
        counts: Mapping[Kind, int],
        operation: str,
        description: str,
        dims: tuple[int, ...] = SUPPORTED_DIMENSIONS,
        result_dim: int | None = None,
    ) -> None:
        self.counts = dict(counts)
        self.operation = operation
        self.description = description
        self.dims = dims
        self.result_dim = result_dim

    def matches(self, arguments: ArgumentSet) -> bool:
        if arguments.unclassified:
            return False
        return all(arguments.count(kind) == n for kind, n in self.counts.items())

    def select(self, arguments: ArgumentSet) -> list[GeometryVector]:
        return [v for kind in self.counts for v in arguments[kind]]

    @override
    def __repr__(self) -> str:
        return f"Signature({self.operation!r}, {self.description!r})"


class ConstructorTable:
    """An ordered table of the signatures a constructor supports. The first matching signature wins.

    Args:
        kind: The kind of the constructed primitives.
        *signatures: The supported signatures in order of precedence.

    """

    def __init__(self, kind: Kind, *signatures: Signature) -> None:
        self.kind = kind
        self.signatures = list(signatures)

    def match(self, arguments: ArgumentSet) -> Signature:
        """Select the signature for the given arguments.

        Raises:
            UnsupportedCombination: If no signature matches.
            DimensionMismatch: If the matching construction is not defined in the dimension of the arguments.

        """
        for signature in self.signatures:
            if signature.matches(arguments):
                break
        else:
            raise UnsupportedCombination(f"Don't know how to construct {self.kind.plural} from the given input")

        dim = arguments.dim
        if dim is not None and dim not in signature.dims:
            raise DimensionMismatch(
                f"{self.kind.plural.capitalize()} in {dim} dimensions cannot be constructed from {signature.description}"
            )
        return signature

    def __iter__(self) -> Iterator[Signature]:
        return iter(self.signatures)

    def __len__(self) -> int:
        return len(self.signatures)


def _default_kernel() -> Kernel:
    from geomvec.kernel import DEFAULT_KERNEL

    return DEFAULT_KERNEL


def construct(
    kind: Kind | str, *args: object, default_dim: int | None = None, kernel: Kernel | None = None, **named: object
) -> GeometryVector:
    """Construct a vector of primitives of the given kind from any supported combination of arguments.

    Raw numbers are converted to exact numbers, arguments of length 1 are recycled to the length of the longest
    argument and the construction is chosen from the kinds of the arguments.

    Args:
        kind: The kind of primitives to construct.
        *args: The arguments, in any order.
        default_dim: The dimension of the result if it cannot be inferred from the arguments. By default the default
            dimension of the kind, see :meth:`GeometryVector.empty`.
        kernel: The kernel performing the constructions, by default :data:`geomvec.kernel.DEFAULT_KERNEL`.
        **named: Named arguments, for readability only. They are appended to the positional arguments.

    Returns:
        The constructed vector.

    Raises:
        DimensionMismatch: If the arguments have different dimensions or the construction is not defined in their
            dimension.
        LengthMismatch: If the argument lengths are incompatible.
        UnsupportedCombination: If no construction matches the kinds of the arguments.
        DegenerateConstruction: If the arguments are in a degenerate configuration.

    """
    kind = Kind(kind)
    collection_class = GeometryVector._get_collection_class(kind)
    table = collection_class._constructors
    if table is None:
        raise UnsupportedCombination(f"No constructors are defined for {kind.plural}")

    all_args = (*args, *named.values())
    inputs = validate_constructor_input(*all_args)

    if len(inputs) == 0:
        dim = common_dimension(promote_argument(x) for x in all_args)
        return collection_class.empty(default_dim if dim is None else dim)

    arguments = classify_arguments(inputs)
    signature = table.match(arguments)
    selected = signature.select(arguments)
    logger.debug(
        "Constructing %d %s from %s using %s", len(selected[0]), kind.plural, signature.description, signature.operation
    )

    if kernel is None:
        kernel = _default_kernel()

    elements = []
    for i, primitives in enumerate(zip(*(v.array for v in selected))):
        if any(p is None for p in primitives):
            elements.append(None)
            continue
        try:
            elements.append(kernel.apply(signature.operation, *primitives))
        except DegenerateConstruction as e:
            if e.index is None:
                e.index = i
            raise

    dim = signature.result_dim or arguments.dim
    return collection_class(elements, dim=dim)
