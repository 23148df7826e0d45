"""JPL DE and IMCCE INPOP binary ephemerides.

These files are a sequence of fixed-size records. Record 1 holds the titles,
the constant names, the covered Julian date range, the AU, the Earth/Moon mass
ratio and the coefficient pointer table; record 2 holds the constant values;
every later record covers ``step`` days and starts with its own Julian date
range, followed by Chebyshev coefficients for each body. A pointer table row
``(offset, ncoef, nsub)`` says where a body's coefficients start (1-based
double index), how many coefficients each component has and how many
sub-intervals the record is split into.

INPOP files carry DE number 100 and store the record size in the header. They
may also tabulate velocity coefficients, positions in AU and times in TCB; the
FORMAT, UNITE and TIMESC constants say which.

Records are evaluated with the same Clenshaw evaluator as SPK type 2 segments.
"""

from __future__ import annotations

import logging
import math
import os
import struct
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

import numpy as np

from spk_tools.constants import (
    EARTH_BARYCENTER_ID,
    EARTH_ID,
    INPOP_DE_NUMBER,
    J2000_JD,
    JPL_AU_KM_RANGE,
    JPL_CHEBYSHEV_BODIES,
    JPL_EMRAT_RANGE,
    JPL_MAX_CONSTANTS,
    JPL_MAX_RECORD_DAYS,
    L_B,
    MOON_ID,
    SECONDS_PER_DAY,
    SSB_ID,
    T0_JD,
    TDB0_SECONDS,
)
from spk_tools.errors import CoverageError, FormatError
from spk_tools.spk.names import body_code_to_string
from spk_tools.spk.record import evaluate_type2

logger = logging.getLogger(__name__)

# Header record offsets (bytes)
_TITLES = slice(0, 252)
_TITLE_LEN = 84
_CONSTANT_NAMES = 252
_CONSTANT_NAME_LEN = 6
_START_JD = 2652
_END_JD = 2660
_STEP_DAYS = 2668
_AU = 2680
_EMRAT = 2688
_POINTERS = 2696
_DE_NUMBER = 2840
_LIBRATION_POINTERS = 2844
_INPOP_RECORD_SIZE = 2856
_HEADER_BYTES = _INPOP_RECORD_SIZE + 4

# Pointer table row of each body; the Moon row is geocentric.
_POINTER_ROWS = {1: 0, 2: 1, 3: 2, 4: 3, 5: 4, 6: 5, 7: 6, 8: 7, 9: 8, MOON_ID: 9, 10: 10}
_GEOCENTRIC_MOON_ROW = 9

# Constant names (DE, INPOP) of GM in AU^3/day^2
_GM_CONSTANTS = {
    10: ('GMS', 'GM_Sun'),
    1: ('GM1', 'GM_Mer'),
    2: ('GM2', 'GM_Ven'),
    3: ('GMB', 'GM_EMB'),
    4: ('GM4', 'GM_Mar'),
    5: ('GM5', 'GM_Jup'),
    6: ('GM6', 'GM_Sat'),
    7: ('GM7', 'GM_Ura'),
    8: ('GM8', 'GM_Nep'),
    9: ('GM9', 'GM_Plu'),
}


def _detect_byteorder(header: bytes) -> str:
    # The DE number is small; read big-endian it is huge if the file is little-endian.
    (de_number,) = struct.unpack('>I', header[_DE_NUMBER : _DE_NUMBER + 4])
    return '<' if de_number > 1 << 15 else '>'


def _tcb_from_tdb(et: float) -> float:
    """TCB seconds past J2000 for TDB seconds past J2000."""
    return (et - TDB0_SECONDS + L_B * (J2000_JD - T0_JD) * SECONDS_PER_DAY) / (1.0 - L_B)


def _tdb_from_tcb(tcb: float) -> float:
    """TDB seconds past J2000 for TCB seconds past J2000."""
    return tcb * (1.0 - L_B) - L_B * (J2000_JD - T0_JD) * SECONDS_PER_DAY + TDB0_SECONDS


def _seconds_from_jd(jd: float) -> float:
    return (jd - J2000_JD) * SECONDS_PER_DAY


class JplEphemeris:
    """One open DE or INPOP binary ephemeris file.

    States are given in the ICRF, reported as J2000, with positions in km and
    velocities in km/s. Planetary barycenters and the Sun are relative to the
    solar system barycenter; the Earth and the Moon are relative to the
    Earth-Moon barycenter, split from the geocentric Moon with the file's
    Earth/Moon mass ratio.

    Parameters:
        path: Ephemeris file.

    Raises:
        FormatError: If the file is not a DE/INPOP binary ephemeris.
        OSError: If the file cannot be read.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path).resolve()
        self._file: BinaryIO | None = open(self.path, 'rb')
        try:
            self._read_header()
        except BaseException:
            self.close()
            raise
        logger.debug(
            'Opened %s ephemeris %s: DE %d, JD %.1f to %.1f, %g-day records, %d components',
            'INPOP' if self.is_inpop else 'JPL',
            self.path,
            self.de_number,
            self.start_jd,
            self.end_jd,
            self.step_days,
            self.components,
        )

    def _read_header(self) -> None:
        f = self._require_open()
        file_size = os.fstat(f.fileno()).st_size
        header = f.read(_HEADER_BYTES)
        if len(header) < _HEADER_BYTES:
            raise FormatError(f'{self.path}: too short for a JPL ephemeris header')
        bo = self.byteorder = _detect_byteorder(header)

        def ints(offset: int, count: int) -> tuple[int, ...]:
            return struct.unpack(f'{bo}{count}i', header[offset : offset + 4 * count])

        def double(offset: int) -> float:
            return struct.unpack(bo + 'd', header[offset : offset + 8])[0]

        (self.de_number,) = ints(_DE_NUMBER, 1)
        self.is_inpop = self.de_number == INPOP_DE_NUMBER
        pointers = ints(_POINTERS, 3 * JPL_CHEBYSHEV_BODIES)
        self.pointers = [
            (pointers[3 * j], pointers[3 * j + 1], pointers[3 * j + 2]) for j in range(JPL_CHEBYSHEV_BODIES)
        ]
        libration = ints(_LIBRATION_POINTERS, 3)
        if any(v < 0 for row in self.pointers for v in row) or any(v < 0 for v in libration):
            raise FormatError(f'{self.path}: not a JPL ephemeris (negative coefficient pointers)')

        if self.is_inpop:
            (ndoubles,) = ints(_INPOP_RECORD_SIZE, 1)
        else:
            ndoubles = 2 + sum(
                ncoef * nsub * (2 if j == JPL_CHEBYSHEV_BODIES - 1 else 3)
                for j, (_, ncoef, nsub) in enumerate(self.pointers)
            )
            ndoubles += libration[1] * libration[2] * 3
        self.record_doubles = ndoubles
        self.record_bytes = 8 * ndoubles
        if self.record_bytes < _HEADER_BYTES:
            raise FormatError(f'{self.path}: not a JPL ephemeris (record size {self.record_bytes} bytes)')
        if file_size < 3 * self.record_bytes:
            raise FormatError(f'{self.path}: no data records')
        self.nrecords = file_size // self.record_bytes - 2

        f.seek(0)
        first = f.read(self.record_bytes)
        second = f.read(self.record_bytes)
        self.titles = [
            first[i : i + _TITLE_LEN].decode('latin-1').strip()
            for i in range(_TITLES.start, _TITLES.stop, _TITLE_LEN)
        ]
        self.constants = self._parse_constants(first, second)

        self.start_jd = double(_START_JD)
        self.end_jd = double(_END_JD)
        self.step_days = double(_STEP_DAYS)
        if not (self.end_jd > self.start_jd and 0.0 < self.step_days < JPL_MAX_RECORD_DAYS):
            raise FormatError(
                f'{self.path}: not a JPL ephemeris (JD {self.start_jd} to {self.end_jd}, '
                f'step {self.step_days} days)'
            )
        self.au_km = self.constants.get('AU', double(_AU))
        self.emrat = self.constants.get('EMRAT', double(_EMRAT))
        if not JPL_AU_KM_RANGE[0] <= self.au_km <= JPL_AU_KM_RANGE[1]:
            raise FormatError(f'{self.path}: not a JPL ephemeris (AU = {self.au_km} km)')
        if not JPL_EMRAT_RANGE[0] <= self.emrat <= JPL_EMRAT_RANGE[1]:
            raise FormatError(f'{self.path}: not a JPL ephemeris (EMRAT = {self.emrat})')

        self.components = 3
        self.position_scale = 1.0
        self.time_scale = 'TDB'
        if self.is_inpop:
            fmt = self.constants.get('FORMAT')
            if fmt is not None and int(math.remainder(fmt, 10.0)) != 1:
                self.components = 6
            unite = self.constants.get('UNITE')
            if unite is not None and int(unite) == 0:
                self.position_scale = self.au_km
            timesc = self.constants.get('TIMESC')
            if timesc is not None and int(timesc) == 1:
                self.time_scale = 'TCB'

    def _parse_constants(self, first: bytes, second: bytes) -> dict[str, float]:
        values = np.frombuffer(second, dtype=np.dtype(np.float64).newbyteorder(self.byteorder))
        constants: dict[str, float] = {}
        for i in range(min(JPL_MAX_CONSTANTS, values.size)):
            offset = _CONSTANT_NAMES + i * _CONSTANT_NAME_LEN
            name = first[offset : offset + _CONSTANT_NAME_LEN].decode('latin-1').strip(' \x00')
            if not name:
                break
            constants[name] = float(values[i])
        return constants

    def _require_open(self) -> BinaryIO:
        if self._file is None:
            raise ValueError(f'Ephemeris {self.path} is closed')
        return self._file

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def close(self) -> None:
        """Close the file; further reads raise ValueError."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> JplEphemeris:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _file_seconds(self, et: float) -> float:
        """Convert TDB seconds past J2000 to the file's time scale."""
        return _tcb_from_tdb(et) if self.time_scale == 'TCB' else et

    @property
    def start_et(self) -> float:
        """First covered epoch, TDB seconds past J2000."""
        start = _seconds_from_jd(self.start_jd)
        return _tdb_from_tcb(start) if self.time_scale == 'TCB' else start

    @property
    def end_et(self) -> float:
        """Last covered epoch, TDB seconds past J2000."""
        end = _seconds_from_jd(min(self.end_jd, self.start_jd + self.nrecords * self.step_days))
        return _tdb_from_tcb(end) if self.time_scale == 'TCB' else end

    def covers(self, et: float) -> bool:
        return self.start_et <= et <= self.end_et

    def _has_row(self, row: int) -> bool:
        _, ncoef, nsub = self.pointers[row]
        return ncoef > 0 and nsub > 0

    def has_body(self, body: int) -> bool:
        """True if the file tabulates body (Earth and Moon need the geocentric Moon and the EMB)."""
        if body in (EARTH_ID, MOON_ID):
            return self._has_row(_GEOCENTRIC_MOON_ROW)
        row = _POINTER_ROWS.get(body)
        return row is not None and self._has_row(row)

    def bodies(self) -> list[int]:
        """Body IDs this file gives states for, ascending."""
        return sorted(body for body in (*_POINTER_ROWS, EARTH_ID) if self.has_body(body))

    @staticmethod
    def center_of(body: int) -> int:
        """Center of the states given for body."""
        return EARTH_BARYCENTER_ID if body in (EARTH_ID, MOON_ID) else SSB_ID

    def chebyshev_record(self, row: int, et: float) -> np.ndarray:
        """Return the coefficients of pointer table row covering et.

        Returns:
            ``[RSIZE, MID, RADIUS, x, y, z coefficient sets]`` with MID and
            RADIUS in seconds of the file's time scale and coefficients in km,
            ready for evaluate_type2.

        Raises:
            CoverageError: If et lies outside the file's records.
            FormatError: If a data record does not cover its expected range.
        """
        f = self._require_open()
        offset, ncoef, nsub = self.pointers[row]
        if ncoef <= 0 or nsub <= 0:
            raise CoverageError(f'{self.path}: no coefficients for pointer row {row}')
        if not self.covers(et):
            raise CoverageError(
                f'Epoch {et} outside {self.path.name} coverage [{self.start_et}, {self.end_et}]'
            )
        t = self._file_seconds(et)
        step = self.step_days * SECONDS_PER_DAY
        index = min(int((t - _seconds_from_jd(self.start_jd)) // step), self.nrecords - 1)
        f.seek((2 + index) * self.record_bytes)
        data = f.read(self.record_bytes)
        if len(data) != self.record_bytes:
            raise FormatError(f'{self.path}: data record {index} truncated')
        record = np.frombuffer(data, dtype=np.dtype(np.float64).newbyteorder(self.byteorder))
        begin = _seconds_from_jd(float(record[0]))
        end = _seconds_from_jd(float(record[1]))
        if not begin <= t <= end:
            raise FormatError(
                f'{self.path}: data record {index} spans JD {record[0]} to {record[1]}, not epoch {et}'
            )
        length = (end - begin) / nsub
        chunk = min(int((t - begin) // length), nsub - 1)
        first = offset - 1 + self.components * chunk * ncoef
        if first < 2 or first + 3 * ncoef > self.record_doubles:
            raise FormatError(f'{self.path}: coefficient pointer {offset} outside the record')
        coeffs = record[first : first + 3 * ncoef].astype(np.float64) * self.position_scale
        return np.concatenate(
            ([2.0 + 3 * ncoef, begin + (chunk + 0.5) * length, 0.5 * length], coeffs)
        )

    def _row_state(self, row: int, et: float) -> np.ndarray:
        position, velocity = evaluate_type2(self._file_seconds(et), self.chebyshev_record(row, et))
        if self.time_scale == 'TCB':
            velocity = velocity / (1.0 - L_B)
        return np.concatenate((position, velocity))

    def state(self, body: int, et: float) -> tuple[np.ndarray, int]:
        """Return (state, center): body relative to center at et (TDB seconds past J2000).

        Raises:
            CoverageError: If the file has no data for body at et.
        """
        if not self.has_body(body):
            raise CoverageError(f'{self.path.name} has no data for {body_code_to_string(body)}')
        if body in (EARTH_ID, MOON_ID):
            moon = self._row_state(_GEOCENTRIC_MOON_ROW, et)
            if body == MOON_ID:
                return moon * (self.emrat / (1.0 + self.emrat)), EARTH_BARYCENTER_ID
            return moon * (-1.0 / (1.0 + self.emrat)), EARTH_BARYCENTER_ID
        return self._row_state(_POINTER_ROWS[body], et), SSB_ID

    def _constant(self, *names: str) -> float | None:
        for name in names:
            if name in self.constants:
                return self.constants[name]
        return None

    def gm(self, body: int) -> float | None:
        """Gravitational parameter (km^3/s^2) from the file's constants, if present."""
        if body == SSB_ID:
            parts = [self.gm(b) for b in _GM_CONSTANTS]
            return None if any(p is None for p in parts) else sum(p for p in parts if p is not None)
        if body in (EARTH_ID, MOON_ID):
            emb = self.gm(EARTH_BARYCENTER_ID)
            if emb is None:
                return None
            moon = emb / (1.0 + self.emrat)
            return moon if body == MOON_ID else moon * self.emrat
        names = _GM_CONSTANTS.get(body)
        raw = self._constant(*names) if names else None
        if raw is None:
            return None
        return raw * self.au_km**3 / SECONDS_PER_DAY**2


def is_jpl_ephemeris(path: str | os.PathLike[str]) -> bool:
    """True if path looks like a DE/INPOP binary rather than a DAF."""
    with open(path, 'rb') as f:
        head = f.read(8)
    return not (head.startswith(b'DAF/') or head == b'NAIF/DAF')
