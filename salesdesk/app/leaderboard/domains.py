from salesdesk.app.leaderboard.constants import POINTS_PER_ACCOUNT_CREATED, POINTS_PER_DEMO, SizeCategoryEnum
from salesdesk.common.domain import BaseDomain


class DemoBreakdown(BaseDomain):
    small: int = 0
    medium: int = 0
    enterprise: int = 0

    @property
    def total(self) -> int:
        return self.small + self.medium + self.enterprise

    def add(self, category: SizeCategoryEnum) -> 'DemoBreakdown':
        """
        Returns a new breakdown with one more demo in `category`
        """
        field_name = SizeCategoryEnum(category).value
        return self.model_copy(update={field_name: getattr(self, field_name) + 1})


class Scoring(BaseDomain):
    account_created: int = POINTS_PER_ACCOUNT_CREATED
    demo_small: int = POINTS_PER_DEMO[SizeCategoryEnum.SMALL]
    demo_medium: int = POINTS_PER_DEMO[SizeCategoryEnum.MEDIUM]
    demo_enterprise: int = POINTS_PER_DEMO[SizeCategoryEnum.ENTERPRISE]

    def score(self, accounts_created: int, demos: DemoBreakdown) -> int:
        return (
            accounts_created * self.account_created
            + demos.small * self.demo_small
            + demos.medium * self.demo_medium
            + demos.enterprise * self.demo_enterprise
        )


class LeaderboardUser(BaseDomain):
    user_id: str
    name: str
    accounts_created: int = 0
    demos: DemoBreakdown
    points: int = 0


class LeaderboardResponse(BaseDomain):
    period: str
    start_date: str
    end_date: str
    users: list[LeaderboardUser]
    scoring: Scoring
