from xmlform import setupModule

config, logger = setupModule(__name__)
