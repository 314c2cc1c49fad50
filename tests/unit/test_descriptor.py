"""Test Descriptor immutability and DescriptorBuilder."""

import pytest
from pydantic import ValidationError

from patternkit.core.errors import ConfigError
from patternkit.core.models import Descriptor
from patternkit.factory.builder import DescriptorBuilder


class TestDescriptor:
    def test_frozen(self):
        descriptor = Descriptor(kind="butler/plain")
        with pytest.raises(ValidationError):
            descriptor.kind = "animal/lion"

    def test_blank_kind_rejected(self):
        with pytest.raises(ValidationError):
            Descriptor(kind="   ")

    def test_kind_is_stripped(self):
        assert Descriptor(kind=" animal/lion ").kind == "animal/lion"

    def test_params_detached_from_caller(self):
        params = {"greeting": "Hi"}
        descriptor = Descriptor(kind="butler/plain", params=params)
        params["greeting"] = "Bye"
        assert descriptor.param("greeting") == "Hi"

    def test_family(self):
        assert Descriptor(kind="animal/lion").family == "animal"
        assert Descriptor(kind="lion").family is None

    def test_of(self):
        descriptor = Descriptor.of("animal/lion", sound="purr")
        assert descriptor.params == {"sound": "purr"}
        assert descriptor.param("missing", "x") == "x"

    def test_constructor_kwargs_is_a_copy(self):
        descriptor = Descriptor.of("k", a=1)
        kwargs = descriptor.constructor_kwargs()
        kwargs["b"] = 2
        assert descriptor.params == {"a": 1}

    def test_params_read_only(self):
        for descriptor in (Descriptor.of("k", a=1), Descriptor(kind="k")):
            with pytest.raises(TypeError):
                descriptor.params["b"] = 2

    def test_built_params_read_only(self):
        descriptor = DescriptorBuilder("k").param("a", 1).build()
        with pytest.raises(TypeError):
            descriptor.params["a"] = 2
        assert descriptor.params == {"a": 1}


class TestDescriptorBuilder:
    def test_fluent_build(self):
        descriptor = (
            DescriptorBuilder("butler/plain")
            .param("greeting", "Bon appetit,")
            .params(name="Jeeves")
            .build()
        )
        assert descriptor.kind == "butler/plain"
        assert descriptor.params == {"greeting": "Bon appetit,", "name": "Jeeves"}

    def test_kind_can_be_set_later(self):
        assert DescriptorBuilder().kind("animal/lion").build().kind == "animal/lion"

    def test_build_without_kind_raises(self):
        with pytest.raises(ConfigError):
            DescriptorBuilder().param("a", 1).build()

    def test_built_descriptor_unaffected_by_later_steps(self):
        builder = DescriptorBuilder("animal/lion").param("sound", "roar")
        first = builder.build()
        builder.param("sound", "purr")
        second = builder.build()
        assert first.param("sound") == "roar"
        assert second.param("sound") == "purr"

    def test_built_descriptor_creates_object(self, registry):
        descriptor = DescriptorBuilder("butler/plain").param("greeting", "Voila,").build()
        assert registry.create(descriptor).invoke("cake") == "Voila, cake"
