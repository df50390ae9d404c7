"""
modifications - fixed and variable modifications per domain
===========================================================

X!Tandem reports every modified residue of a peptide-spectrum match as an
``<aa>`` element, without saying whether the modification was searched as a
fixed (``residue, modification mass``) or a potential one.
:py:class:`ModificationMap` splits the modifications of each domain by
comparing their names (``"57.021@C"``) to the configured fixed modification.

-------------------------------------------------------------------------------
"""

#   Copyright 2012 Anton Goloborodko, Lev Levitsky
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

from collections import defaultdict


class ModificationMap(object):
    """Fixed and variable modifications, keyed by domain id.

    Parameters
    ----------
    modifications : iterable
        :py:class:`~pytandem.records.ResidueModification` objects.
    domains : iterable
        :py:class:`~pytandem.records.Domain` objects the modifications belong to.
    parameters : dict
        Run parameters. A modification is fixed if its name equals
        ``parameters['RESIDUEMODMASS']``.

    Attributes
    ----------
    fixed : dict
        Domain id -> list of fixed modifications.
    variable : dict
        Domain id -> list of variable modifications.
    """

    def __init__(self, modifications, domains, parameters):
        self.fixed_name = parameters.get('RESIDUEMODMASS')
        domain_ids = {domain.identity: domain.id for domain in domains}
        fixed = defaultdict(list)
        variable = defaultdict(list)
        for mod in modifications:
            domain_id = domain_ids.get(mod.domain_identity)
            if domain_id is None:
                continue
            if self.fixed_name is not None and mod.name == self.fixed_name:
                fixed[domain_id].append(mod)
            else:
                variable[domain_id].append(mod)
        self.fixed = dict(fixed)
        self.variable = dict(variable)

    @classmethod
    def from_result(cls, result):
        """Build the map from a :py:class:`~pytandem.records.TandemResult`."""
        return cls(result.modifications, result.domains, result.parameters)

    def get_fixed_modifications(self, domain_id):
        """Return the fixed modifications of the domain, possibly empty."""
        return self.fixed.get(domain_id, [])

    def get_variable_modifications(self, domain_id):
        """Return the variable modifications of the domain, possibly empty."""
        return self.variable.get(domain_id, [])
