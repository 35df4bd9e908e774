import logging
import time

from bninfer import enumeration_ask, networks, prior_sample, rejection_sampling, variable_elimination_ask
from bninfer import ordering

logging.basicConfig(level=logging.INFO)

# the burglary/earthquake alarm network, 5 boolean variables
net = networks.alarm()
burglary, john, mary = net['Burglary'], net['JohnCalls'], net['MaryCalls']
evidence = {john: True, mary: True}

# exact posterior, two ways
t0 = time.time()
print('enumeration', enumeration_ask(burglary, evidence, net), time.time() - t0)

t0 = time.time()
print('elimination', variable_elimination_ask(burglary, evidence, net), time.time() - t0)

ans = variable_elimination_ask(burglary, evidence, net, elimination_order=ordering.greedy_order)
print('elimination (greedy order)', ans)

# one joint sample
event = prior_sample(net, rng=0)
print({var.name: value for var, value in event.items()})

# P(JohnCalls=true, MaryCalls=true) is about 0.002, so most samples are rejected
print('rejection', rejection_sampling(burglary, evidence, net, 100000, rng=0, workers=4))
