"""Kernel context: the set of SPK files and JPL ephemerides a caller has loaded.

Example::

    with KernelContext() as context:
        context.load_kernel('de440.bsp')
        context.load_kernel('mar097.bsp')
        state, lt = KernelIndex(context).get_state_relative_to_body('MARS', 0.0, 'J2000', 'EARTH')

Files loaded later take priority over earlier ones when both cover a body.
SPK segments take priority over DE/INPOP binary ephemerides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType

from spk_tools.constants import SPK_ND, SPK_NI
from spk_tools.daf.directory import SegmentDirectory
from spk_tools.daf.file import DafHandle, close_daf, open_daf
from spk_tools.errors import FormatError
from spk_tools.spk.jpl import JplEphemeris, is_jpl_ephemeris

logger = logging.getLogger(__name__)


class KernelContext:
    """Tracks loaded kernels by canonical path; owns their DAF handles and ephemeris files."""

    def __init__(self) -> None:
        # Insertion order is load order.
        self._kernels: dict[Path, DafHandle] = {}
        self._ephemerides: dict[Path, JplEphemeris] = {}

    def load(self, path: str | os.PathLike[str]) -> DafHandle | JplEphemeris:
        """Load an SPK kernel or a DE/INPOP binary ephemeris, whichever path is."""
        if is_jpl_ephemeris(path):
            return self.load_ephemeris(path)
        return self.load_kernel(path)

    def load_kernel(self, path: str | os.PathLike[str]) -> DafHandle:
        """Open an SPK file and add it to the context.

        Loading a file that is already loaded returns its handle unchanged.

        Raises:
            FormatError: If the file is not a valid SPK; the context is unchanged.
            OSError: If the file cannot be read.
        """
        canonical = Path(path).resolve()
        existing = self._kernels.get(canonical)
        if existing is not None:
            logger.debug('Kernel %s already loaded (handle %d)', canonical, existing.handle)
            return existing
        handle = open_daf(canonical)
        try:
            if (handle.nd, handle.ni) != (SPK_ND, SPK_NI):
                raise FormatError(
                    f'{canonical}: not an SPK file (ND={handle.nd}, NI={handle.ni}; expected 2 and 6)'
                )
            if handle.kernel_type not in ('SPK', '?'):
                logger.warning('%s: ID word %r is not an SPK ID word', canonical, handle.idword)
            SegmentDirectory(handle).begin_forward_search()
        except BaseException:
            close_daf(handle)
            raise
        self._kernels[canonical] = handle
        logger.info('Loaded kernel %s (handle %d)', canonical, handle.handle)
        return handle

    def load_ephemeris(self, path: str | os.PathLike[str]) -> JplEphemeris:
        """Open a JPL DE or INPOP binary ephemeris and add it to the context.

        Loading a file that is already loaded returns it unchanged.

        Raises:
            FormatError: If the file is not a DE/INPOP binary; the context is unchanged.
            OSError: If the file cannot be read.
        """
        canonical = Path(path).resolve()
        existing = self._ephemerides.get(canonical)
        if existing is not None:
            logger.debug('Ephemeris %s already loaded', canonical)
            return existing
        ephemeris = JplEphemeris(canonical)
        self._ephemerides[canonical] = ephemeris
        logger.info('Loaded ephemeris %s (DE %d)', canonical, ephemeris.de_number)
        return ephemeris

    def unload_kernel(self, path: str | os.PathLike[str]) -> bool:
        """Remove a kernel or ephemeris from the context and release its file.

        Returns:
            True if the file was loaded.
        """
        canonical = Path(path).resolve()
        handle = self._kernels.pop(canonical, None)
        if handle is not None:
            close_daf(handle)
            logger.info('Unloaded kernel %s', canonical)
            return True
        ephemeris = self._ephemerides.pop(canonical, None)
        if ephemeris is not None:
            ephemeris.close()
            logger.info('Unloaded ephemeris %s', canonical)
            return True
        logger.debug('Kernel %s not loaded; nothing to unload', canonical)
        return False

    def unload_all(self) -> None:
        """Release every loaded kernel and ephemeris."""
        for canonical in reversed(list(self._kernels)):
            close_daf(self._kernels.pop(canonical))
        for canonical in reversed(list(self._ephemerides)):
            self._ephemerides.pop(canonical).close()
        logger.debug('All kernels unloaded')

    def is_loaded(self, path: str | os.PathLike[str]) -> DafHandle | None:
        """Return the handle of a loaded SPK kernel, or None."""
        return self._kernels.get(Path(path).resolve())

    def handles(self) -> list[DafHandle]:
        """Return the loaded handles, most recently loaded first."""
        return list(reversed(self._kernels.values()))

    def ephemerides(self) -> list[JplEphemeris]:
        """Return the loaded DE/INPOP ephemerides, most recently loaded first."""
        return list(reversed(self._ephemerides.values()))

    def paths(self) -> list[Path]:
        """Return the loaded kernel paths in load order, SPK kernels first."""
        return [*self._kernels, *self._ephemerides]

    def __len__(self) -> int:
        return len(self._kernels) + len(self._ephemerides)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        canonical = Path(path).resolve()
        return canonical in self._kernels or canonical in self._ephemerides

    def __enter__(self) -> KernelContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.unload_all()
