"""Unit tests for routing excluded ports to alternate profiles or new groups."""

import pytest
from unifi_diagnostics.analysis.fallback_splitter import FallbackSplitter
from unifi_diagnostics.analysis.profile_suggestions import collect_trunk_candidates
from unifi_diagnostics.analysis.suggestion_builder import ClusterContext, SuggestionBuilder
from unifi_diagnostics.analysis.vlan_signature import VlanSignatureResolver
from unifi_diagnostics.models import SuggestionType

POWERED = {'port_poe': True, 'poe_enable': True}
NO_POE = {'port_poe': False}


@pytest.fixture
def context(networks):
    """Context for an allow-all trunk class."""
    resolver = VlanSignatureResolver([], networks)
    return ClusterContext(
        signature=resolver.universe_ids,
        forward='customize',
        vlan_ids=tuple(n.id for n in resolver.ordered(resolver.universe_ids)),
        vlan_names=tuple(resolver.vlan_names(resolver.universe_ids)),
        allows_all=True,
    )


@pytest.fixture
def candidates(make_port, make_switch, networks):
    """Turn port specs into trunk candidates on one switch."""

    def _make(*specs):
        ports = [make_port(i + 1, **spec) for i, spec in enumerate(specs)]
        switch = make_switch('aa:bb:cc:00:00:01', 'Core', ports)
        return collect_trunk_candidates([switch], VlanSignatureResolver([], networks))

    return _make


@pytest.fixture
def splitter():
    return FallbackSplitter(SuggestionBuilder())


class TestFallbackSplitter:
    """Test the fallback path for excluded ports."""

    def test_nothing_excluded(self, splitter, context):
        """Test no excluded ports means no suggestions."""
        assert splitter.split(context, [], [], set(), {}) == []

    def test_alternate_profile_apply(self, splitter, context, candidates, make_profile):
        """Test excluded ports go to an untried profile that fits them all."""
        ports = candidates({'speed': 2500}, {'speed': 2500})
        tried = make_profile('p10g', autoneg=False, speed=10000)
        alternate = make_profile('p2g5', autoneg=False, speed=2500)
        suggestions = splitter.split(context, ports, [tried, alternate], {'p10g'}, {})
        assert len(suggestions) == 1
        assert suggestions[0].type is SuggestionType.APPLY_EXISTING
        assert suggestions[0].matching_profile_id == 'p2g5'

    def test_alternate_profile_with_users_extends(self, splitter, context, candidates, make_profile):
        """Test an alternate profile already used in the class yields ExtendUsage."""
        ports = candidates(POWERED, POWERED, POWERED)
        user, excluded = ports[:1], ports[1:]
        alternate = make_profile('poe')
        suggestions = splitter.split(context, excluded, [alternate], set(), {'poe': user})
        assert suggestions[0].type is SuggestionType.EXTEND_USAGE
        assert suggestions[0].ports_already_using == 1
        assert suggestions[0].ports_without_profile == 2

    def test_tried_profiles_skipped(self, splitter, context, candidates, make_profile):
        """Test the profile that rejected the ports is not offered again."""
        ports = candidates({}, {})
        profile = make_profile('p')
        suggestions = splitter.split(context, ports, [profile], {'p'}, {})
        assert [s.type for s in suggestions] == [SuggestionType.CREATE_NEW]

    def test_regroup_forced_speeds(self, splitter, context, candidates):
        """Test forced ports at different speeds become separate new profiles."""
        forced = {'autoneg': False}
        ports = candidates(
            {'speed': 1000, **forced}, {'speed': 2500, **forced},
            {'speed': 1000, **forced}, {'speed': 2500, **forced},
        )
        suggestions = splitter.split(context, ports, [], set(), {})
        assert [[p.port_idx for p in s.affected_ports] for s in suggestions] == [[1, 3], [2, 4]]
        assert all(s.type is SuggestionType.CREATE_NEW for s in suggestions)

    def test_single_leftover_dropped(self, splitter, context, candidates):
        """Test one excluded port yields no suggestion."""
        assert splitter.split(context, candidates(POWERED), [], set(), {}) == []

    def test_subgroup_alternate(self, splitter, context, candidates, make_profile):
        """Test a regrouped sub-cluster can still land on an alternate profile."""
        forced = {'autoneg': False}
        ports = candidates(
            {'speed': 1000, **forced}, {'speed': 2500, **forced},
            {'speed': 1000, **forced}, {'speed': 2500, **forced},
        )
        gig = make_profile('p1g', autoneg=False, speed=1000)
        suggestions = splitter.split(context, ports, [gig], set(), {})
        assert [s.type for s in suggestions] == [SuggestionType.APPLY_EXISTING, SuggestionType.CREATE_NEW]
        assert suggestions[0].matching_profile_id == 'p1g'

    def test_mixed_poe_kept_together(self, splitter, context, candidates):
        """Test a split that would leave a one-port half keeps the group whole."""
        suggestions = splitter.split(context, candidates(POWERED, NO_POE, NO_POE), [], set(), {})
        assert len(suggestions) == 1
        assert suggestions[0].poe_mixed is True
        assert suggestions[0].suggested_profile_name == 'Trunk - All VLANs (PoE)'
