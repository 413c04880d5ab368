"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import uuid4

import httpx
import pytest

from calorie_track.adapters.fdc_client import FdcClient
from calorie_track.config import Settings
from calorie_track.containers import AppContainer
from calorie_track.domain.entries import Entry, EntryDraft
from calorie_track.domain.models import AuthUser, FoodHistoryItem, UserRecord
from calorie_track.domain.nutrition import NutrientProfile
from calorie_track.services.auth import TokenVerifier
from calorie_track.services.cache import InMemoryCache
from calorie_track.services.entries import EntryRepository, EntryService
from calorie_track.services.foods import FoodHistoryRepository, FoodHistoryService
from calorie_track.services.nutrition import NutritionService
from calorie_track.services.recommendations import (
    RecommendationClient,
    RecommendationService,
)
from calorie_track.services.stats import StatsRepository, StatsService
from calorie_track.services.users import UserRepository, UserService

TEST_TOKEN = "valid-token"
TEST_UID = "user-1"
SUPABASE_TEST_KEY = (
    "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
)

CHICKEN_BREAST = {
    "fdcId": 171077,
    "description": "Chicken, broilers or fryers, breast, meat only, raw",
    "dataType": "SR Legacy",
    "foodNutrients": [
        {"nutrient": {"id": 1008, "number": "208"}, "amount": 120},
        {"nutrient": {"id": 1003, "number": "203"}, "amount": 22.5},
        {"nutrient": {"id": 1004, "number": "204"}, "amount": 2.62},
        {"nutrient": {"id": 1005, "number": "205"}, "amount": 0},
    ],
}


def make_entry(  # noqa: PLR0913
    day: date,
    calories: float,
    protein: float = 0.0,
    fat: float = 0.0,
    carbs: float = 0.0,
    owner_id: str = TEST_UID,
    name: str = "food",
) -> Entry:
    now = datetime.now(tz=UTC)
    return Entry(
        id=str(uuid4()),
        owner_id=owner_id,
        name=name,
        quantity="",
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        date=day,
        created_at=now,
        updated_at=now,
    )


@dataclass
class InMemoryEntryRepository(EntryRepository, StatsRepository):
    """In-memory entry repository for tests."""

    entries: dict[str, Entry] = field(default_factory=dict)

    def add(self, entry: Entry) -> Entry:
        self.entries[entry.id] = entry
        return entry

    def create_entry(self, owner_id: str, draft: EntryDraft) -> Entry:
        now = datetime.now(tz=UTC)
        return self.add(
            Entry(
                id=str(uuid4()),
                owner_id=owner_id,
                name=draft.name,
                quantity=draft.quantity,
                calories=draft.calories,
                protein=draft.protein,
                fat=draft.fat,
                carbs=draft.carbs,
                date=draft.date,
                created_at=now,
                updated_at=now,
            )
        )

    def get_entry(self, owner_id: str, entry_id: str) -> Entry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.owner_id != owner_id:
            return None
        return entry

    def list_entries_by_date(self, owner_id: str, day: date) -> list[Entry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.owner_id == owner_id and entry.date == day
        ]

    def list_entries_in_range(
        self, owner_id: str, start: date, end: date
    ) -> list[Entry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.owner_id == owner_id and start <= entry.date <= end
        ]

    def update_entry(self, owner_id: str, entry_id: str, draft: EntryDraft) -> Entry:
        current = self.entries[entry_id]
        updated = replace(
            current,
            name=draft.name,
            quantity=draft.quantity,
            calories=draft.calories,
            protein=draft.protein,
            fat=draft.fat,
            carbs=draft.carbs,
            date=draft.date,
            updated_at=datetime.now(tz=UTC),
        )
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, owner_id: str, entry_id: str) -> None:
        self.entries.pop(entry_id, None)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    profile_updates: list[str] = field(default_factory=list)

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(
        self, user_id: str, email: str, display_name: str, calorie_goal: float
    ) -> UserRecord:
        user = UserRecord(
            id=user_id,
            email=email,
            display_name=display_name,
            calorie_goal=calorie_goal,
        )
        self.users[user_id] = user
        return user

    def update_profile(self, user_id: str, email: str, display_name: str) -> None:
        self.profile_updates.append(user_id)
        self.users[user_id] = replace(
            self.users[user_id], email=email, display_name=display_name
        )

    def update_calorie_goal(self, user_id: str, calorie_goal: float) -> None:
        self.users[user_id] = replace(self.users[user_id], calorie_goal=calorie_goal)


@dataclass
class InMemoryFoodRepository(FoodHistoryRepository):
    """In-memory food history repository for tests."""

    foods: dict[str, FoodHistoryItem] = field(default_factory=dict)

    def find_by_name(self, owner_id: str, name: str) -> FoodHistoryItem | None:
        for food in self.foods.values():
            if food.owner_id == owner_id and food.name == name:
                return food
        return None

    def create_food(
        self, owner_id: str, name: str, profile: NutrientProfile, used_at: datetime
    ) -> FoodHistoryItem:
        food = FoodHistoryItem(
            id=str(uuid4()),
            owner_id=owner_id,
            name=name,
            profile=profile,
            usage_count=1,
            last_used_at=used_at,
        )
        self.foods[food.id] = food
        return food

    def record_use(
        self, food_id: str, profile: NutrientProfile, used_at: datetime
    ) -> None:
        current = self.foods[food_id]
        self.foods[food_id] = replace(
            current,
            profile=profile,
            usage_count=current.usage_count + 1,
            last_used_at=used_at,
        )

    def list_foods(self, owner_id: str) -> list[FoodHistoryItem]:
        return [food for food in self.foods.values() if food.owner_id == owner_id]

    def search_foods(self, owner_id: str, query: str) -> list[FoodHistoryItem]:
        return [
            food
            for food in self.list_foods(owner_id)
            if query.lower() in food.name.lower()
        ]


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [CHICKEN_BREAST]}
    )
    foods: dict[int, dict[str, object]] = field(
        default_factory=lambda: {171077: CHICKEN_BREAST}
    )
    bulk_only: bool = False
    search_calls: int = 0
    food_calls: int = 0
    bulk_calls: int = 0
    last_data_types: list[str] | None = None

    async def search_foods(
        self, query: str, page_size: int = 10, data_types: list[str] | None = None
    ) -> dict[str, object]:
        self.search_calls += 1
        self.last_data_types = data_types
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls += 1
        if self.bulk_only or fdc_id not in self.foods:
            request = httpx.Request("GET", f"https://fdc.test/food/{fdc_id}")
            raise httpx.HTTPStatusError(
                "Not Found",
                request=request,
                response=httpx.Response(404, request=request),
            )
        return self.foods[fdc_id]

    async def get_foods(self, fdc_ids: list[int]) -> list[dict[str, object]]:
        self.bulk_calls += 1
        return [self.foods[fdc_id] for fdc_id in fdc_ids if fdc_id in self.foods]


@dataclass
class FakeRecommendationClient(RecommendationClient):
    """Fake recommendation client that records prompts."""

    text: str = "Try Greek yogurt, lentils and salmon."
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


@dataclass
class FakeTokenVerifier(TokenVerifier):
    """Token verifier accepting a fixed set of tokens."""

    users: dict[str, AuthUser] = field(
        default_factory=lambda: {
            TEST_TOKEN: AuthUser(
                uid=TEST_UID, email="test@example.com", display_name="Test"
            )
        }
    )

    def verify(self, token: str) -> AuthUser | None:
        return self.users.get(token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SUPABASE_TEST_KEY,
        fdc_api_key="fdc-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def recommendation_client() -> FakeRecommendationClient:
    return FakeRecommendationClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    entry_repository: InMemoryEntryRepository,
    user_repository: InMemoryUserRepository,
    food_repository: InMemoryFoodRepository,
    fdc_client: FakeFdcClient,
    recommendation_client: FakeRecommendationClient,
) -> AppContainer:
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )
    food_history_service = FoodHistoryService(food_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_verifier=FakeTokenVerifier(),
        user_service=UserService(user_repository),
        nutrition_service=nutrition_service,
        food_history_service=food_history_service,
        entry_service=EntryService(
            repository=entry_repository,
            nutrition_service=nutrition_service,
            food_history=food_history_service,
        ),
        stats_service=StatsService(entry_repository),
        recommendation_service=RecommendationService(
            client=recommendation_client, model=settings.openai_model
        ),
        close_resources=close_resources,
    )
