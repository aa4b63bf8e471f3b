"""METAR string parser for flight category classification.

Parses raw METAR strings into Observation objects carrying the fields the
classifier and the flight display need: station, time, wind, visibility,
cloud layers, temperature and dewpoint.
"""

import re
from datetime import UTC, datetime

from flightlookup.core.logging_system import get_logger
from flightlookup.services.weather.models import CloudLayer, Observation, SkyCondition, Wind

logger = get_logger(__name__)

METERS_PER_STATUTE_MILE = 1609.344

# CAVOK implies visibility of 10 km or more
CAVOK_VISIBILITY_SM = 10.0


class METARParser:
    """Parse METAR strings into Observation objects.

    Handles US (statute miles) and ICAO (metres, CAVOK) visibility groups.
    """

    WIND_PATTERN = re.compile(r"\b(\d{3}|VRB)(\d{2,3})(?:G(\d{2,3}))?(KT|MPS)\b")
    # "10SM", "1/2SM", "1 1/2SM", "M1/4SM", "P6SM"
    VISIBILITY_SM_PATTERN = re.compile(r"(?:^|\s)([MP])?(?:(\d+)\s)?(\d+)(?:/(\d+))?SM\b")
    # "9999", "0800": standalone 4-digit group in metres
    VISIBILITY_M_PATTERN = re.compile(r"(?:^|\s)(\d{4})(?:NDV)?(?=\s|$)")
    SKY_PATTERN = re.compile(
        r"(?:^|\s)(CLR|SKC|NSC|NCD|FEW|SCT|BKN|OVC|VV)(\d{3}|///)?(CB|TCU)?(?=\s|$)"
    )
    TEMP_PATTERN = re.compile(r"(?:^|\s)(M)?(\d{2})/(M)?(\d{2})?(?=\s|$)")
    TIME_PATTERN = re.compile(r"(\d{2})(\d{2})(\d{2})Z")

    CONDITION_MAP = {
        "CLR": SkyCondition.CLEAR,
        "SKC": SkyCondition.CLEAR,
        "NSC": SkyCondition.CLEAR,
        "NCD": SkyCondition.CLEAR,
        "FEW": SkyCondition.FEW,
        "SCT": SkyCondition.SCATTERED,
        "BKN": SkyCondition.BROKEN,
        "OVC": SkyCondition.OVERCAST,
        "VV": SkyCondition.VERTICAL_VISIBILITY,
    }

    def parse(self, raw_metar: str) -> Observation | None:
        """Parse a raw METAR string into an Observation.

        Args:
            raw_metar: Raw METAR string
                (e.g., "KJFK 251751Z 31012G20KT 10SM BKN250 18/08 A3002")

        Returns:
            Observation, or None if the string is not a METAR.
        """
        if not raw_metar or len(raw_metar.strip()) < 10:
            logger.warning("METAR too short to parse: %s", raw_metar)
            return None

        parts = raw_metar.upper().split()

        start_idx = 0
        if parts[0] in ("METAR", "SPECI"):
            start_idx = 1

        if len(parts) < start_idx + 2:
            logger.warning("METAR has too few parts: %s", raw_metar)
            return None

        icao = parts[start_idx]
        if len(icao) != 4 or not icao.isalnum():
            logger.warning("Invalid ICAO code in METAR: %s", icao)
            return None

        # Remarks may contain groups that look like body groups
        body = " ".join(parts[start_idx + 1 :]).split(" RMK")[0]

        try:
            temperature, dewpoint = self._parse_temperature(body)

            return Observation(
                icao=icao,
                visibility_sm=self._parse_visibility(body),
                clouds=self._parse_sky(body),
                wind=self._parse_wind(body),
                observation_time=self._parse_time(parts[start_idx + 1]),
                temperature=temperature,
                dewpoint=dewpoint,
                raw_metar=raw_metar.strip(),
            )

        except Exception as e:
            logger.error("Failed to parse METAR '%s': %s", raw_metar, e)
            return None

    def _parse_time(self, time_str: str) -> datetime | None:
        """Parse METAR time group (DDHHMMZ) relative to the current month."""
        match = self.TIME_PATTERN.fullmatch(time_str)
        if not match:
            return None

        now = datetime.now(UTC)
        try:
            return now.replace(
                day=int(match.group(1)),
                hour=int(match.group(2)),
                minute=int(match.group(3)),
                second=0,
                microsecond=0,
            )
        except ValueError:
            logger.debug("Invalid METAR time group: %s", time_str)
            return None

    def _parse_wind(self, body: str) -> Wind | None:
        """Parse wind group, converting MPS to knots."""
        match = self.WIND_PATTERN.search(body)
        if not match:
            return None

        direction = -1 if match.group(1) == "VRB" else int(match.group(1))
        speed = int(match.group(2))
        gust = int(match.group(3)) if match.group(3) else None

        if match.group(4) == "MPS":
            speed = round(speed * 1.943844)
            gust = round(gust * 1.943844) if gust is not None else None

        return Wind(direction=direction, speed=speed, gust=gust)

    def _parse_visibility(self, body: str) -> float | None:
        """Parse visibility in statute miles, None if not reported."""
        if "CAVOK" in body.split():
            return CAVOK_VISIBILITY_SM

        match = self.VISIBILITY_SM_PATTERN.search(body)
        if match:
            whole = int(match.group(2)) if match.group(2) else 0
            numerator = int(match.group(3))
            if match.group(4):
                denominator = int(match.group(4))
                if denominator == 0:
                    return None
                value = whole + numerator / denominator
            else:
                value = float(whole + numerator)
            return value

        match = self.VISIBILITY_M_PATTERN.search(body)
        if match:
            return int(match.group(1)) / METERS_PER_STATUTE_MILE

        return None

    def _parse_sky(self, body: str) -> list[CloudLayer]:
        """Parse cloud layers, lowest first as reported."""
        layers = []
        for match in self.SKY_PATTERN.finditer(body):
            condition = self.CONDITION_MAP[match.group(1)]
            altitude_str = match.group(2)

            # CLR/SKC carry no layer; "///" heights are unknown
            if condition == SkyCondition.CLEAR or not altitude_str or altitude_str == "///":
                continue

            layers.append(
                CloudLayer(
                    condition=condition,
                    altitude=int(altitude_str) * 100,
                    type=match.group(3),
                )
            )

        return layers

    def _parse_temperature(self, body: str) -> tuple[int | None, int | None]:
        """Parse temperature and dewpoint in Celsius."""
        match = self.TEMP_PATTERN.search(body)
        if not match:
            return None, None

        temp = int(match.group(2))
        if match.group(1):  # M prefix = minus
            temp = -temp

        dewpoint = None
        if match.group(4):
            dewpoint = int(match.group(4))
            if match.group(3):
                dewpoint = -dewpoint

        return temp, dewpoint
