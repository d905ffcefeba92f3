"""Campus building catalog (advisory: submissions may use other names)"""
from typing import Dict, List

from facility_reports.domain.models.stats import Coordinates

BUILDINGS: List[str] = [
    "백년관",
    "공학관",
    "도서관",
    "교양관",
    "인문경상관",
    "어문관",
    "기숙사",
    "주차장",
    "자연과학관",
    "후생관",
    "학생회관",
]

FLOORS: List[str] = [
    "지하2층",
    "지하1층",
    "1층",
    "2층",
    "3층",
    "4층",
    "5층",
    "6층",
    "7층",
    "8층",
]

# HUFS Global Campus map coordinates
BUILDING_COORDINATES: Dict[str, Coordinates] = {
    "백년관": Coordinates(lat=37.33734649116593, lng=127.26548524902515),
    "공학관": Coordinates(lat=37.33760215213574, lng=127.26798567357692),
    "도서관": Coordinates(lat=37.33677693774583, lng=127.26832691635222),
    "교양관": Coordinates(lat=37.339809326464454, lng=127.27208427942806),
    "인문경상관": Coordinates(lat=37.33977645549827, lng=127.27461196939714),
    "어문관": Coordinates(lat=37.338136140181824, lng=127.27285688210742),
    "기숙사": Coordinates(lat=37.33452634133701, lng=127.26343854797861),
    "주차장": Coordinates(lat=37.33738437241575, lng=127.26667025522217),
    "자연과학관": Coordinates(lat=37.338935246799004, lng=127.26917920999111),
    "후생관": Coordinates(lat=37.33778977973904, lng=127.26868598313412),
    "학생회관": Coordinates(lat=37.33729145709139, lng=127.26989729060432),
}

CAMPUS_CENTER = Coordinates(lat=37.337, lng=127.268)
