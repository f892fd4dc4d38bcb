"""Example guest list domain: invitation commands, aggregate, projectors, logging and a response saga."""