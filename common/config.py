"""General configuration."""

import luigi


class misc(luigi.Config):
  random_seed = luigi.IntParameter(1)


class data(luigi.Config):
  test_fraction = luigi.FloatParameter(0.1)


class checkpoint(luigi.Config):
  location = luigi.Parameter("cache")


class threshold(luigi.Config):
  start = luigi.FloatParameter(-0.05)
  stop = luigi.FloatParameter(0.95)
  step = luigi.FloatParameter(0.05)
