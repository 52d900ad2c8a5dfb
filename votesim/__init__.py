'''Simulate elections to compare the outcomes of election methods.

An election profile (:class:`votesim.profile.ElectionProfile`) holds
simulated voters of various kinds (:mod:`votesim.voters`), honest or
strategic, and the number of candidates. The election methods
(:mod:`votesim.evaluate`) ask the voters for ballots and rank the
candidates; :mod:`votesim.system` keeps the catalog of all methods and runs
it against a profile, streaming the results to a consumer.
'''
