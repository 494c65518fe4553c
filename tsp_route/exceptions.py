class TSPRouteError(Exception):
    pass


class InsufficientCitiesError(TSPRouteError, ValueError):
    def __init__(self, strategy: str, required: int, given: int):
        self.strategy = strategy
        self.required = required
        self.given = given
        super().__init__(f"{strategy} needs at least {required} cities, got {given}")


class MalformedRouteError(TSPRouteError, ValueError):
    pass


class UnknownStrategyError(TSPRouteError, KeyError):
    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class InstanceError(TSPRouteError, ValueError):
    pass
