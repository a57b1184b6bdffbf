from .people import PersonIn, SignOut

from .compatibility import (
    CompatibilityScoreResponse,
    BestMatchRequest,
    BestMatchResponse,
    MatchOut,
)
from .daily import (
    DailyColorsRequest,
    DailyColorsResponse,
    DailyProfileRequest,
    DailyProfileResponse,
)
from .fortune import (
    AreaFortune,
    DailyFortune,
    DailyFortuneResponse,
    AdviceRequest,
    AdviceResponse,
    LuckySummaryRequest,
    LuckySummaryResponse,
)
from .almanac import AlmanacResponse
