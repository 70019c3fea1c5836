"""
neuroinfo.core
==============

Names, errors and component base classes shared by all estimators.
"""
