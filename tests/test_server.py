"""
Unit tests for Server API

Tests cover:
1. Leaderboard query (기본 종목, limit, 대체 종목, 부분 결과)
2. Single performance classification
3. Event / tier metadata
4. Result submission + realtime event publishing
5. Realtime relay
"""

import math

from ranking.leaderboard import AthletePerformanceRecord


# =============================================================================
# Leaderboard Tests
# =============================================================================

class TestRankingsQuery:
    """GET /api/rankings"""

    def test_default_event(self, client):
        response = client.get("/api/rankings")
        assert response.status_code == 200

        data = response.json()
        assert data["event"] == "100m"
        assert data["scope"] == "state"
        assert data["total"] == 10
        assert data["used_fallback"] is False
        assert data["rejected"] == []
        assert "lastUpdated" in data
        assert "last_updated" not in data

        top = data["leaderboard"][0]
        assert top["rank"] == 1
        assert top["athlete_name"] == "Jaylen 'Flash' Thompson"
        assert top["tier"] == "GODSPEED"
        assert top["formatted_performance"] == "10.15"
        assert top["rank_change"]["direction"] == "same"

    def test_ranks_sequential(self, client):
        data = client.get("/api/rankings?event=100m").json()
        assert [e["rank"] for e in data["leaderboard"]] == list(range(1, 11))

    def test_limit(self, client):
        data = client.get("/api/rankings?event=100m&limit=3").json()
        assert data["total"] == 10
        assert len(data["leaderboard"]) == 3

    def test_invalid_limit(self, client):
        assert client.get("/api/rankings?limit=0").status_code == 422

    def test_other_event(self, client):
        data = client.get("/api/rankings?event=200m").json()
        assert data["total"] == 5
        assert data["leaderboard"][0]["athlete_name"] == "Tyler Smith"
        assert data["leaderboard"][0]["formatted_performance"] == "20.45"

    def test_unknown_event_falls_back(self, client):
        data = client.get("/api/rankings?event=Javelin").json()
        assert data["used_fallback"] is True
        assert data["event"] == "100m"
        assert data["total"] == 10

    def test_event_without_records(self, client):
        data = client.get("/api/rankings?event=LJ").json()
        assert data["event"] == "LJ"
        assert data["total"] == 0
        assert data["leaderboard"] == []

    def test_invalid_record_reported(self, client, repository):
        repository.save("100m", AthletePerformanceRecord(
            id="bad", name="Broken Timer", school="", performance=math.nan
        ))
        data = client.get("/api/rankings?event=100m").json()

        assert data["total"] == 10
        assert len(data["rejected"]) == 1
        assert data["rejected"][0]["athlete_id"] == "bad"
        assert data["rejected"][0]["performance"] == "nan"


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassify:
    """POST /api/rankings"""

    def test_classify_timed(self, client):
        response = client.post("/api/rankings", json={"event": "100m", "performance": 11500})
        assert response.status_code == 200

        data = response.json()
        assert data["tier"] == "ELITE"
        assert data["points"] == 500.0
        assert data["formatted_performance"] == "11.50"

    def test_classify_field(self, client):
        data = client.post("/api/rankings", json={"event": "LJ", "performance": 742, "is_field_event": True}).json()
        assert data["tier"] == "WORLD_CLASS"
        assert data["formatted_performance"] == "7.42m"

    def test_points_rounded(self, client):
        data = client.post("/api/rankings", json={"event": "100m", "performance": 10150}).json()
        assert data["points"] == round(995 + 5 * 50 / 350, 2)

    def test_unknown_event_flagged(self, client):
        data = client.post("/api/rankings", json={"event": "Javelin", "performance": 10150}).json()
        assert data["used_fallback"] is True
        assert data["event"] == "100m"

    def test_negative_performance(self, client):
        response = client.post("/api/rankings", json={"event": "100m", "performance": -5})
        assert response.status_code == 400

    def test_missing_performance(self, client):
        response = client.post("/api/rankings", json={"event": "100m"})
        assert response.status_code == 422


# =============================================================================
# Metadata Tests
# =============================================================================

class TestMetadata:
    """종목 / 티어 목록"""

    def test_events(self, client):
        events = client.get("/api/rankings/events").json()["events"]
        by_name = {e["short_name"]: e for e in events}
        assert by_name["100m"]["is_field_event"] is False
        assert by_name["LJ"]["is_field_event"] is True

    def test_tiers(self, client):
        tiers = client.get("/api/rankings/tiers").json()["tiers"]
        assert [t["tier"] for t in tiers][0] == "ROOKIE"
        assert [t["tier"] for t in tiers][-1] == "GODSPEED"
        assert len(tiers) == 8

    def test_status(self, client):
        data = client.get("/api/status").json()
        assert data["status"] == "ok"
        assert data["events"] == {"100m": 10, "200m": 5}
        assert data["total_records"] == 15


# =============================================================================
# Result Submission Tests
# =============================================================================

class TestSubmitResult:
    """POST /api/rankings/results"""

    def test_new_athlete_takes_first(self, client, publisher):
        response = client.post("/api/rankings/results", json={
            "event": "100m",
            "athlete_id": "99",
            "athlete_name": "New Sprinter",
            "school": "Central HS",
            "performance": 10100,
        })
        assert response.status_code == 200

        data = response.json()
        assert data["personal_record"] is True
        assert data["entry"]["rank"] == 1
        assert data["entry"]["rank_change"]["display"] == "NEW"
        assert len(data["rank_changes"]) == 10

        types = [e.event_type.value for e in publisher.get_recent_events()]
        assert types[0] == "NEW_PR"
        assert types[-1] == "LEADERBOARD_UPDATED"
        assert types.count("RANK_CHANGE") == 10
        assert len(types) == 12

    def test_improvement_moves_athlete_up(self, client):
        data = client.post("/api/rankings/results", json={
            "event": "100m",
            "athlete_id": "10",
            "athlete_name": "Brandon Lee",
            "school": "Franklin HS",
            "performance": 10700,
        }).json()

        assert data["personal_record"] is True
        assert data["entry"]["rank"] == 4
        assert data["entry"]["rank_change"]["display"] == "+8"
        moved = {c["athlete_id"]: (c["old_rank"], c["new_rank"]) for c in data["rank_changes"]}
        assert moved["10"] == (10, 4)
        assert moved["4"] == (4, 5)

    def test_slower_result_not_saved(self, client, repository, publisher):
        data = client.post("/api/rankings/results", json={
            "event": "100m",
            "athlete_id": "10",
            "athlete_name": "Brandon Lee",
            "performance": 11500,
        }).json()

        assert data["personal_record"] is False
        assert data["entry"]["rank"] == 10
        assert repository.get("100m", "10").performance == 11400
        assert publisher.get_recent_events() == []

    def test_alias_event_name(self, client, repository):
        response = client.post("/api/rankings/results", json={
            "event": "Long Jump",
            "athlete_id": "D",
            "athlete_name": "Jumper",
            "performance": 742,
        })
        assert response.status_code == 200
        assert response.json()["event"] == "LJ"
        assert response.json()["entry"]["formatted_performance"] == "7.42m"
        assert len(repository.list("LJ")) == 1

    def test_unknown_event_rejected(self, client):
        response = client.post("/api/rankings/results", json={
            "event": "Javelin",
            "athlete_id": "1",
            "athlete_name": "Thrower",
            "performance": 5000,
        })
        assert response.status_code == 400

    def test_invalid_performance_rejected(self, client, repository):
        response = client.post("/api/rankings/results", json={
            "event": "100m",
            "athlete_id": "99",
            "athlete_name": "Broken",
            "performance": -5,
        })
        assert response.status_code == 400
        assert repository.get("100m", "99") is None


# =============================================================================
# Realtime Relay Tests
# =============================================================================

class TestRealtime:
    """POST /api/realtime, GET /api/realtime/events"""

    def test_publish_and_read_back(self, client):
        response = client.post("/api/realtime", json={
            "type": "RANK_CHANGE",
            "payload": {"athlete_id": "2", "athlete_name": "Marcus", "event": "100m", "old_rank": 3, "new_rank": 2},
        })
        assert response.status_code == 200
        assert response.json() == {"success": True, "type": "RANK_CHANGE"}

        events = client.get("/api/realtime/events").json()["events"]
        assert len(events) == 1
        assert events[0]["room"] == "event:100m"
        assert events[0]["payload"]["new_rank"] == 2

    def test_unknown_type(self, client):
        response = client.post("/api/realtime", json={"type": "GOAL_SCORED", "payload": {}})
        assert response.status_code == 400

    def test_missing_fields(self, client):
        response = client.post("/api/realtime", json={"type": "NEW_PR", "payload": {"athlete_id": "1"}})
        assert response.status_code == 400
        assert "athlete_name" in response.json()["detail"]
