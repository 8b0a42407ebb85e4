"""
Tests pour le service de l'eau : cumul par jour, correction, vues jour/semaine.
"""
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from uuid import uuid4

import pytest
from sqlmodel import SQLModel, Session, create_engine, select

from hydrosleep.core.errors import ConflictError, NotFoundError, ValidationError
from hydrosleep.domain.entities import GoalType, User, UserCreate, WaterLog
from hydrosleep.domain.services import log_store
from hydrosleep.domain.services.auth_service import auth_service
from hydrosleep.domain.services.goal_service import goal_service
from hydrosleep.domain.services.water_service import water_service

from conftest import SUNDAY, MONDAY, TUESDAY, WEDNESDAY, PASSWORD


class TestRecordWater:
    def test_first_add_creates_log(self, session, user_id):
        log = water_service.record_water(session, user_id, 250, day=MONDAY)

        assert log.id is not None
        assert log.day == MONDAY
        assert log.amount_ml == 250

    def test_adds_accumulate_on_same_row(self, session, user_id):
        first = water_service.record_water(session, user_id, 250, day=MONDAY)
        second = water_service.record_water(session, user_id, 500, day=MONDAY)

        assert second.id == first.id
        assert second.amount_ml == 750
        rows = session.exec(select(WaterLog).where(WaterLog.day == MONDAY)).all()
        assert len(rows) == 1

    def test_range_query_returns_single_summed_row(self, session, user_id):
        water_service.record_water(session, user_id, 250, day=MONDAY)
        water_service.record_water(session, user_id, 500, day=MONDAY)

        logs = water_service.find_in_range(session, user_id, MONDAY, TUESDAY)
        assert len(logs) == 1
        assert logs[0].amount_ml == 750

    def test_range_query_empty(self, session, user_id):
        assert water_service.find_in_range(session, user_id, SUNDAY, WEDNESDAY) == []

    def test_different_days_separate_rows(self, session, user_id):
        water_service.record_water(session, user_id, 250, day=MONDAY)
        water_service.record_water(session, user_id, 250, day=TUESDAY)

        assert len(session.exec(select(WaterLog)).all()) == 2

    def test_iso_string_day(self, session, user_id, local_tz):
        local_tz("UTC")
        log = water_service.record_water(session, user_id, 300, day="2024-01-10T21:00:00Z")
        assert log.day == WEDNESDAY

    def test_iso_string_day_in_local_time(self, session, user_id, local_tz):
        # 21h UTC le mercredi = jeudi 6h a Tokyo
        local_tz("Asia/Tokyo")
        log = water_service.record_water(session, user_id, 300, day="2024-01-10T21:00:00Z")
        assert log.day == date(2024, 1, 11)

    def test_defaults_to_today(self, session, user_id):
        log = water_service.record_water(session, user_id, 300, today=TUESDAY)
        assert log.day == TUESDAY

    @pytest.mark.parametrize("amount", [0, -250])
    def test_non_positive_amount_rejected(self, session, user_id, amount):
        with pytest.raises(ValidationError) as exc_info:
            water_service.record_water(session, user_id, amount, day=MONDAY)
        assert exc_info.value.field == "amount_ml"
        assert session.exec(select(WaterLog)).first() is None

    def test_users_do_not_share_rows(self, session, user_id, other_user):
        water_service.record_water(session, user_id, 250, day=MONDAY)
        other = water_service.record_water(session, str(other_user.id), 400, day=MONDAY)

        assert other.amount_ml == 400


@pytest.fixture
def row_lock_fallback(monkeypatch):
    """Force le chemin SELECT .. FOR UPDATE puis ecriture (moteur sans ON CONFLICT)"""
    monkeypatch.setattr(log_store, "_dialect_insert", lambda session: None)


@pytest.fixture
def file_engine(tmp_path):
    """Base SQLite sur disque, une connexion par thread"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'hydrosleep.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


class TestUpsertFallback:
    def test_repeated_adds_sum_on_one_row(self, session, user_id, row_lock_fallback):
        first = water_service.record_water(session, user_id, 250, day=MONDAY)
        water_service.record_water(session, user_id, 500, day=MONDAY)
        third = water_service.record_water(session, user_id, 100, day=MONDAY)

        assert third.id == first.id
        assert third.amount_ml == 850
        rows = session.exec(select(WaterLog).where(WaterLog.day == MONDAY)).all()
        assert len(rows) == 1

    def test_concurrent_insert_raises_conflict(self, session, user_id, row_lock_fallback, monkeypatch):
        water_service.record_water(session, user_id, 250, day=MONDAY)
        # Un autre writer a insere la ligne apres notre lecture verrouillee
        monkeypatch.setattr(log_store, "_locked_get", lambda session, model, user_id, day: None)

        with pytest.raises(ConflictError):
            water_service.record_water(session, user_id, 500, day=MONDAY)

        rows = session.exec(select(WaterLog)).all()
        assert len(rows) == 1
        assert rows[0].amount_ml == 250


class TestConcurrentAdds:
    ADDS_PER_THREAD = 10

    def test_two_threads_same_day_single_row(self, file_engine):
        with Session(file_engine) as session:
            auth_service.signup(
                session, UserCreate(name="Alice Johnson", email="alice@example.com", password=PASSWORD)
            )
            user_id = str(session.exec(select(User)).one().id)

        barrier = threading.Barrier(2)

        def _add_many():
            barrier.wait()
            with Session(file_engine) as session:
                for _ in range(self.ADDS_PER_THREAD):
                    water_service.record_water(session, user_id, 100, day=MONDAY)

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(_add_many) for _ in range(2)]
            for future in futures:
                future.result()

        with Session(file_engine) as session:
            rows = session.exec(select(WaterLog)).all()
        assert len(rows) == 1
        assert rows[0].amount_ml == 2 * self.ADDS_PER_THREAD * 100


class TestUpdateLog:
    def test_replaces_amount(self, session, user_id):
        log = water_service.record_water(session, user_id, 2500, day=MONDAY)
        updated = water_service.update_log(session, log.id, user_id, 1800)

        assert updated.amount_ml == 1800

    def test_zero_allowed(self, session, user_id):
        log = water_service.record_water(session, user_id, 2500, day=MONDAY)
        assert water_service.update_log(session, log.id, user_id, 0).amount_ml == 0

    def test_negative_rejected(self, session, user_id):
        log = water_service.record_water(session, user_id, 2500, day=MONDAY)
        with pytest.raises(ValidationError):
            water_service.update_log(session, log.id, user_id, -1)

    def test_other_users_log_is_not_found(self, session, user_id, other_user):
        log = water_service.record_water(session, user_id, 2500, day=MONDAY)
        with pytest.raises(NotFoundError):
            water_service.update_log(session, log.id, str(other_user.id), 100)

    def test_unknown_id(self, session, user_id):
        with pytest.raises(NotFoundError):
            water_service.update_log(session, uuid4(), user_id, 100)


class TestWaterViews:
    def test_today_without_log(self, session, user_id):
        today = water_service.get_today(session, user_id, today=MONDAY)

        assert today.amount_ml == 0
        assert today.daily_goal_ml == 3000
        assert today.progress == 0

    def test_record_with_progress(self, session, user_id):
        result = water_service.record_with_progress(session, user_id, 1500, day=MONDAY)

        assert result.amount_ml == 1500
        assert result.daily_goal_ml == 3000
        assert result.progress == 50.0

    def test_goal_change_applies_to_progress(self, session, user_id):
        goal_service.update_goal_by_type(session, user_id, GoalType.WATER, 2.5)
        water_service.record_water(session, user_id, 2500, day=MONDAY)

        today = water_service.get_today(session, user_id, today=MONDAY)
        assert today.daily_goal_ml == 2500
        assert today.progress == 100.0

    def test_week_scenario(self, session, user_id):
        water_service.record_water(session, user_id, 3000, day=SUNDAY)
        water_service.record_water(session, user_id, 3500, day=MONDAY)
        wed = water_service.record_water(session, user_id, 3200, day=WEDNESDAY)

        week = water_service.get_week(session, user_id, today=WEDNESDAY)

        assert week.start_date == SUNDAY
        assert week.daily_goal_ml == 3000
        assert week.daily_goal_liters == 3.0
        assert [e.amount_ml for e in week.entries] == [3000, 3500, 0, 3200, 0, 0, 0]
        assert [e.goal_met for e in week.entries] == [True, True, False, True, False, False, False]
        assert week.goal_met_count == 3
        assert week.eligible_day_count == 4
        assert week.weekly_goal_met is False
        assert week.entries[3].id == wed.id
        assert week.entries[2].id is None

    def test_week_all_met_so_far(self, session, user_id):
        for day in (SUNDAY, MONDAY, TUESDAY):
            water_service.record_water(session, user_id, 3000, day=day)

        week = water_service.get_week(session, user_id, today=TUESDAY)
        assert week.weekly_goal_met is True

    def test_explicit_week_start(self, session, user_id):
        water_service.record_water(session, user_id, 1000, day=MONDAY)

        week = water_service.get_week(session, user_id, week_start=MONDAY, today=WEDNESDAY)
        assert week.start_date == MONDAY
        assert week.entries[0].label == "Mon"
        assert week.entries[0].amount_ml == 1000
