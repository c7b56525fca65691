"""
목 데이터 (개발/데모용)

기록 단위: 트랙 ms
"""

MOCK_PERFORMANCES = {
    "100m": [
        {"id": "1", "name": "Jaylen 'Flash' Thompson", "school": "Lincoln HS", "performance": 10150, "previous_rank": 1},
        {"id": "2", "name": "Marcus Johnson", "school": "Roosevelt HS", "performance": 10480, "previous_rank": 3},
        {"id": "3", "name": "Tyler Smith", "school": "Jefferson HS", "performance": 10620, "previous_rank": 2},
        {"id": "4", "name": "James Williams", "school": "Washington HS", "performance": 10780, "previous_rank": 5},
        {"id": "5", "name": "Chris Davis", "school": "Adams HS", "performance": 10950, "previous_rank": 4},
        {"id": "6", "name": "Michael Brown", "school": "Madison HS", "performance": 11120, "previous_rank": 6},
        {"id": "7", "name": "David Wilson", "school": "Monroe HS", "performance": 11180, "previous_rank": 9},
        {"id": "8", "name": "Kevin Taylor", "school": "Jackson HS", "performance": 11250, "previous_rank": 7},
        {"id": "9", "name": "Ryan Anderson", "school": "Harrison HS", "performance": 11320, "previous_rank": 8},
        {"id": "10", "name": "Brandon Lee", "school": "Franklin HS", "performance": 11400, "previous_rank": 12},
    ],
    "200m": [
        {"id": "3", "name": "Tyler Smith", "school": "Jefferson HS", "performance": 20450, "previous_rank": 1},
        {"id": "1", "name": "Jaylen 'Flash' Thompson", "school": "Lincoln HS", "performance": 20680, "previous_rank": 2},
        {"id": "2", "name": "Marcus Johnson", "school": "Roosevelt HS", "performance": 21200, "previous_rank": 3},
        {"id": "4", "name": "James Williams", "school": "Washington HS", "performance": 21800, "previous_rank": 4},
        {"id": "5", "name": "Chris Davis", "school": "Adams HS", "performance": 22100, "previous_rank": 6},
    ],
}
