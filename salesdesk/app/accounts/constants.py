from salesdesk.common.enum import BaseEnum


class DealStageEnum(BaseEnum):
    NEW = 'NEW'
    QUALIFIED = 'QUALIFIED'
    DEMO = 'DEMO'
    NEGOTIATION = 'NEGOTIATION'
    WON = 'WON'
    LOST = 'LOST'


class SizeBucketEnum(BaseEnum):
    """
    Buckets derived from an account's headcount
    """

    NONE = 'none'
    LITTLE = 'little'
    SMALL = 'small'
    MEDIUM = 'medium'
    ENTERPRISE = 'enterprise'


# Upper headcount bound (inclusive) of each bucket, checked in order
SIZE_BUCKET_UPPER_BOUNDS = (
    (0, SizeBucketEnum.NONE),
    (9, SizeBucketEnum.LITTLE),
    (24, SizeBucketEnum.SMALL),
    (49, SizeBucketEnum.MEDIUM),
)
