import pytest

from cogniflow.core.config import (
    AnimationConfig, ConfigError, GraphConfig, InteractionConfig,
    SessionConfig, load_config, save_config,
)


def test_defaults():
    config = SessionConfig()
    assert config.graph.node_count == 30
    assert config.graph.bounds == 10.0
    assert config.graph.edge_threshold == 5.0
    assert (config.graph.size_min, config.graph.size_max) == (0.2, 0.5)
    assert config.interaction.nearby_radius == 4.0
    assert config.interaction.keyword_threshold == 5
    assert config.interaction.transform_threshold == 15
    assert config.interaction.completion_delay == 3.0
    assert config.animation.particle_count == 5
    assert config.animation.particle_spacing == 0.1
    assert config.skip_delay == 3.0
    assert config.color == "#7E3ACE"
    assert config.validate() is config


def test_from_dict_partial():
    config = SessionConfig.from_dict({
        'graph': {'node_count': 12},
        'interaction': {'completion_delay': 1.5},
        'seed': 9,
    })
    assert config.graph.node_count == 12
    assert config.graph.bounds == 10.0
    assert config.interaction.completion_delay == 1.5
    assert config.animation == AnimationConfig()
    assert config.seed == 9


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError):
        SessionConfig.from_dict({'graph': {'nodes': 12}})


@pytest.mark.parametrize("config", [
    SessionConfig(graph=GraphConfig(node_count=-1)),
    SessionConfig(graph=GraphConfig(edge_threshold=0.0)),
    SessionConfig(graph=GraphConfig(size_min=0.6, size_max=0.5)),
    SessionConfig(interaction=InteractionConfig(keyword_threshold=0)),
    SessionConfig(interaction=InteractionConfig(keyword_threshold=10, transform_threshold=5)),
    SessionConfig(interaction=InteractionConfig(completion_delay=-1.0)),
    SessionConfig(animation=AnimationConfig(idle_opacity_min=0.9, idle_opacity_max=0.1)),
    SessionConfig(skip_delay=-0.5),
])
def test_invalid_values(config):
    with pytest.raises(ConfigError):
        config.validate()


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_save_and_load(tmp_path):
    path = tmp_path / "session.json"
    config = SessionConfig(seed=4)
    config.graph.node_count = 8
    save_config(config, str(path))

    loaded = load_config(str(path))
    assert loaded == config


def test_unknown_top_level_key_rejected():
    with pytest.raises(ConfigError, match="skip_dely"):
        SessionConfig.from_dict({'skip_dely': 1.0})


@pytest.mark.parametrize("section", ['graph', 'interaction', 'animation'])
@pytest.mark.parametrize("value", [None, [], "fast", 3])
def test_non_mapping_section_rejected(section, value):
    with pytest.raises(ConfigError, match="must be a mapping"):
        SessionConfig.from_dict({section: value})


def test_non_mapping_document_rejected(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ConfigError):
        load_config(str(path))
