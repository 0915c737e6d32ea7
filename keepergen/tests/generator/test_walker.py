"""Tests for the descriptor walker."""

import pytest
from google.protobuf import descriptor_pb2

from keepergen.generator.errors import DescriptorError
from keepergen.generator.walker import iter_messages


def describe_iter_messages():
    def yields_messages_with_options(expect, proto_file, index_options):
        files = [proto_file("blog.proto", [("Post", index_options("creator"))])]
        result = list(iter_messages(files))
        expect(len(result)) == 1
        expect(result[0][0]) == "Post"
        expected = index_options("creator").SerializeToString()
        expect(result[0][1].SerializeToString()) == expected

    def skips_messages_without_options(expect, proto_file, index_options):
        files = [
            proto_file(
                "blog.proto",
                [("Post", index_options("creator")), ("Comment", None)],
            )
        ]
        expect([name for name, _ in iter_messages(files)]) == ["Post"]

    def yields_messages_with_unrelated_options(expect, proto_file, make_options):
        files = [proto_file("blog.proto", [("Legacy", make_options(deprecated=True))])]
        expect([name for name, _ in iter_messages(files)]) == ["Legacy"]

    def visits_files_then_declarations_in_order(expect, proto_file, index_options):
        files = [
            proto_file("a.proto", [("A1", index_options("x")), ("A2", index_options("y"))]),
            proto_file("b.proto", [("B1", index_options("z"))]),
        ]
        expect([name for name, _ in iter_messages(files)]) == ["A1", "A2", "B1"]

    def follows_location_order(expect, proto_file, index_options):
        proto = proto_file(
            "a.proto", [("First", index_options("x")), ("Second", index_options("y"))]
        )
        locations = [
            descriptor_pb2.SourceCodeInfo.Location(path=list(location.path))
            for location in proto.source_code_info.location
        ]
        del proto.source_code_info.location[:]
        proto.source_code_info.location.extend(reversed(locations))
        expect([name for name, _ in iter_messages([proto])]) == ["Second", "First"]

    def ignores_nested_and_non_message_paths(expect, proto_file, index_options):
        proto = proto_file("a.proto", [("Post", index_options("creator"))])
        proto.message_type[0].nested_type.add(name="Inner").options.CopyFrom(index_options("id"))
        proto.source_code_info.location.add(path=[4, 0, 3, 0])
        proto.enum_type.add(name="Kind")
        proto.source_code_info.location.add(path=[5, 0])
        expect([name for name, _ in iter_messages([proto])]) == ["Post"]

    def skips_files_without_source_info(expect, index_options):
        proto = descriptor_pb2.FileDescriptorProto(name="bare.proto")
        proto.message_type.add(name="Post").options.CopyFrom(index_options("creator"))
        expect(list(iter_messages([proto]))) == []

    def rejects_dangling_location(proto_file, index_options):
        proto = proto_file("a.proto", [("Post", index_options("creator"))])
        proto.source_code_info.location.add(path=[4, 3])
        with pytest.raises(DescriptorError):
            list(iter_messages([proto]))

    def rejects_negative_location(index_options):
        proto = descriptor_pb2.FileDescriptorProto(name="a.proto")
        proto.message_type.add(name="Post").options.CopyFrom(index_options("creator"))
        proto.source_code_info.location.add(path=[4, -1])
        with pytest.raises(DescriptorError):
            list(iter_messages([proto]))

    def is_lazy(expect, proto_file, index_options):
        proto = proto_file("a.proto", [("Post", index_options("creator"))])
        proto.source_code_info.location.add(path=[4, 9])
        messages = iter_messages([proto])
        expect(next(messages)[0]) == "Post"
        with pytest.raises(DescriptorError):
            next(messages)
