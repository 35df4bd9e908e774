"""Small textbook networks, useful for examples and tests."""
from .network import CPT, BayesNet
from .variable import RandomVariable


def alarm() -> BayesNet:
    """The burglary/earthquake alarm network with five boolean variables.

    P(Burglary=True | JohnCalls=True, MaryCalls=True) is about 0.284.
    """
    burglary = RandomVariable.boolean("Burglary")
    earthquake = RandomVariable.boolean("Earthquake")
    alarm = RandomVariable.boolean("Alarm")
    john = RandomVariable.boolean("JohnCalls")
    mary = RandomVariable.boolean("MaryCalls")
    return BayesNet([
        CPT.prior(burglary, [0.001, 0.999]),
        CPT.prior(earthquake, [0.002, 0.998]),
        CPT.from_dict(alarm, [burglary, earthquake], {
            (True, True): [0.95, 0.05],
            (True, False): [0.94, 0.06],
            (False, True): [0.29, 0.71],
            (False, False): [0.001, 0.999],
        }),
        CPT.from_dict(john, [alarm], {(True,): [0.90, 0.10], (False,): [0.05, 0.95]}),
        CPT.from_dict(mary, [alarm], {(True,): [0.70, 0.30], (False,): [0.01, 0.99]}),
    ])


def sprinkler() -> BayesNet:
    """The cloudy/sprinkler/rain/wet grass network.

    P(Rain=True | Sprinkler=True) is exactly 0.3.
    """
    cloudy = RandomVariable.boolean("Cloudy")
    sprinkler = RandomVariable.boolean("Sprinkler")
    rain = RandomVariable.boolean("Rain")
    wet = RandomVariable.boolean("WetGrass")
    return BayesNet([
        CPT.prior(cloudy, [0.5, 0.5]),
        CPT.from_dict(sprinkler, [cloudy], {(True,): [0.1, 0.9], (False,): [0.5, 0.5]}),
        CPT.from_dict(rain, [cloudy], {(True,): [0.8, 0.2], (False,): [0.2, 0.8]}),
        CPT.from_dict(wet, [sprinkler, rain], {
            (True, True): [0.99, 0.01],
            (True, False): [0.90, 0.10],
            (False, True): [0.90, 0.10],
            (False, False): [0.0, 1.0],
        }),
    ])
