from salesdesk.common.enum import BaseEnum

DEFAULT_USER_NAME = '(No name)'


class SizeCategoryEnum(BaseEnum):
    """
    Named size an account is assigned to. Demos are worth more for bigger accounts.
    """

    SMALL = 'small'
    MEDIUM = 'medium'
    ENTERPRISE = 'enterprise'


POINTS_PER_ACCOUNT_CREATED = 2
POINTS_PER_DEMO = {
    SizeCategoryEnum.SMALL: 2,
    SizeCategoryEnum.MEDIUM: 3,
    SizeCategoryEnum.ENTERPRISE: 5,
}
