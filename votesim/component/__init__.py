'''Components of election methods: rank scorers and pairwise win scorers.'''
