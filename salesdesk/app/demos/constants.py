from salesdesk.common.enum import BaseEnum


class DemoStatusEnum(BaseEnum):
    SCHEDULED = 'Scheduled'
    COMPLETED = 'Completed'
    CANCELLED = 'Cancelled'
    NO_SHOW = 'NoShow'
