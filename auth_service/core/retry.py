# auth_service/core/retry.py
import asyncio
from typing import Awaitable, Callable, Iterator, Tuple, Type, TypeVar

T = TypeVar("T")


def backoff_delays(
    max_attempts: int,
    initial_delay: float = 1.0,
    factor: float = 2.0,
    max_delay: float = 10.0,
) -> Iterator[float]:
    """
    Esperas entre intentos: initial, initial*factor, ... con tope max_delay.
    Hay max_attempts - 1 esperas (no se espera después del último intento).
    """
    delay = initial_delay
    for _ in range(max_attempts - 1):
        yield min(delay, max_delay)
        delay *= factor


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 10,
    initial_delay: float = 1.0,
    factor: float = 2.0,
    max_delay: float = 10.0,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    on_retry: Callable[[BaseException, int], None] | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Ejecuta `operation` hasta que funcione o se agoten los intentos.

    - on_retry(exc, attempt) se llama en cada fallo que todavía tiene reintento.
    - Agotados los intentos se relanza el último error.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    delays = backoff_delays(max_attempts, initial_delay, factor, max_delay)
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except retry_on as exc:
            delay = next(delays, None)
            if delay is None:
                raise
            if on_retry is not None:
                on_retry(exc, attempt)
            await sleep(delay)
