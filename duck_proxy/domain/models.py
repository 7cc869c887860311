######## models.py
########

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


def _noop() -> None:
    return None


@dataclass
class FetchedResponse:
    """
    One upstream response, owned by a single proxy request.

    headers must be a case-insensitive mapping (the fetcher hands over
    requests' CaseInsensitiveDict). body is consumed at most once.
    """
    status: int
    headers: Mapping[str, str]
    body: Iterable[bytes]
    encoding: Optional[str] = None      # charset declared by upstream, if any
    close: Callable[[], None] = field(default=_noop)

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type") or ""


@dataclass(frozen=True)
class OutgoingResponse:
    status: int
    headers: List[Tuple[str, str]]
    body: Union[str, Iterator[bytes]]   # str: rewritten document, iterator: passthrough stream
    charset: str = "utf-8"

    @property
    def is_document(self) -> bool:
        return isinstance(self.body, str)
