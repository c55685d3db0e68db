"""Tests for animation analysis and path sampling."""

import pytest

from core.animation_detector import AnimationDetector, AnimationCategories
from core.path import Path, PathSection
from core.scene_data import (
    Camera, CameraData, Light, PointLight, DirectionalLight, Mesh, SceneFormat, Material,
)


@pytest.fixture
def detector():
    return AnimationDetector()


@pytest.fixture
def loop_sections():
    return [PathSection(1.0, (1.0, 0.0, 0.0)), PathSection(1.0, (0.0, 0.0, 0.0))]


class TestAnalyzeScene:

    def test_sample_scene(self, detector, sample_scene):
        categories = detector.analyze_scene(sample_scene)
        assert categories.camera_animated
        assert categories.animated_lights == []
        assert categories.static_lights == [0, 1]
        assert categories.animated_meshes == []
        assert categories.static_meshes == [0]
        assert categories.circular_paths == 0

    def test_static_scene(self, detector):
        categories = detector.analyze_scene(SceneFormat())
        assert categories == AnimationCategories()

    def test_animated_entities(self, detector, make_triangle_mesh, two_sections, loop_sections):
        scene = SceneFormat(
            meshes=[
                Mesh(make_triangle_mesh([0])),
                Mesh(make_triangle_mesh([0]), look_at_path=Path(loop_sections)),
            ],
            camera=Camera(look_at_path=Path(loop_sections)),
            lights=[Light(PointLight(), path=Path(two_sections)), Light(PointLight())],
            materials=[Material("m")],
        )
        categories = detector.analyze_scene(scene)

        assert categories.camera_animated
        assert categories.animated_lights == [0]
        assert categories.static_lights == [1]
        assert categories.animated_meshes == [1]
        assert categories.static_meshes == [0]
        assert categories.circular_paths == 2

    def test_summary(self, detector, sample_scene):
        summary = detector.get_animation_summary(detector.analyze_scene(sample_scene))
        lines = summary.splitlines()
        assert lines[0] == "Animation Analysis:"
        assert "  - Camera: animated" in lines
        assert "  - Static Lights: 2" in lines
        assert "  - Circular Paths: 0" in lines


class TestSamplePath:

    def test_frame_numbering_and_times(self, detector, two_sections):
        keyframes = detector.sample_path(Path(two_sections), fps=4, frame_count=5)
        assert [k.frame for k in keyframes] == [1, 2, 3, 4, 5]
        assert [k.time for k in keyframes] == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])

    def test_positions(self, detector, two_sections):
        keyframes = detector.sample_path(Path(two_sections), fps=1, frame_count=3)

        assert keyframes[0].position == pytest.approx((0.0, 0.0, 0.0))
        assert keyframes[1].position == pytest.approx((0.5625, -0.0625, 0.0))
        assert keyframes[2].position == pytest.approx((1.0, 0.0, 0.0))
        assert [k.section_index for k in keyframes] == [0, 0, 1]

    def test_no_look_at_without_look_at_path(self, detector, two_sections):
        keyframes = detector.sample_path(Path(two_sections), fps=1, frame_count=3)
        assert all(k.look_at is None for k in keyframes)

    def test_look_at_path_uses_wrapping_spline(self, detector, two_sections):
        keyframes = detector.sample_path(Path(), fps=1, frame_count=3, look_at_path=Path(two_sections))
        assert keyframes[0].look_at == pytest.approx((0.0, 1.0, 0.0))
        assert keyframes[1].look_at == pytest.approx((0.5, 0.5, 0.0))
        assert keyframes[2].look_at == pytest.approx((1.0, 0.0, 0.0))
        assert [k.section_index for k in keyframes] == [0, 0, 1]

    def test_separate_look_at_path(self, detector, two_sections):
        target = Path([PathSection(1.0, (4.0, 5.0, 6.0))])
        keyframes = detector.sample_path(Path(two_sections), fps=2, frame_count=4, look_at_path=target)
        assert all(k.look_at == pytest.approx((4.0, 5.0, 6.0)) for k in keyframes)

    def test_source_path_is_untouched(self, detector, two_sections):
        path = Path(two_sections)
        path.update(0.5)
        detector.sample_path(path, fps=10, frame_count=50)
        assert path.current_section_index == 0
        assert path.elapsed_in_section == 0.5

    def test_samples_continue_from_current_cursor(self, detector, two_sections):
        path = Path(two_sections)
        path.update(2.0)
        keyframes = detector.sample_path(path, fps=1, frame_count=1)
        assert keyframes[0].position == pytest.approx((1.0, 0.0, 0.0))
        assert keyframes[0].section_index == 1

    def test_loop_returns_to_start(self, detector, loop_sections):
        keyframes = detector.sample_path(Path(loop_sections, 3.0), fps=10, frame_count=21)
        assert keyframes[-1].position == pytest.approx(keyframes[0].position, abs=1e-9)


class TestSampleEntity:

    def test_camera_without_position_path_stays_in_place(self, detector, two_sections):
        camera = Camera(data=CameraData(position=(5.0, 5.0, 5.0)), look_at_path=Path(two_sections))
        keyframes = detector.sample_entity(camera, fps=1, frame_count=3)

        assert all(k.position == pytest.approx((5.0, 5.0, 5.0)) for k in keyframes)
        assert keyframes[1].look_at == pytest.approx((0.5, 0.5, 0.0))
        assert [k.section_index for k in keyframes] == [0, 0, 1]

    def test_camera_without_look_at_path_looks_along_direction(self, detector, two_sections):
        camera = Camera(data=CameraData(direction=(0.0, 0.0, 1.0)), position_path=Path(two_sections))
        keyframes = detector.sample_entity(camera, fps=1, frame_count=3)
        assert keyframes[2].position == pytest.approx((1.0, 0.0, 0.0))
        assert keyframes[2].look_at == pytest.approx((1.0, 0.0, 1.0))

    def test_point_light_has_no_look_at(self, detector, two_sections):
        light = Light(PointLight(), path=Path(two_sections))
        keyframes = detector.sample_entity(light, fps=1, frame_count=3)
        assert keyframes[1].position == pytest.approx((0.5625, -0.0625, 0.0))
        assert all(k.look_at is None for k in keyframes)

    def test_static_point_light_uses_geometry(self, detector):
        light = Light(PointLight(position=(0.0, 30.0, 0.0)))
        keyframes = detector.sample_entity(light, fps=1, frame_count=2)
        assert all(k.position == pytest.approx((0.0, 30.0, 0.0)) for k in keyframes)
        assert all(k.section_index == 0 for k in keyframes)

    def test_directional_light_has_no_position(self, detector):
        keyframes = detector.sample_entity(Light(DirectionalLight()), fps=1, frame_count=2)
        assert all(k.position is None and k.look_at is None for k in keyframes)

    def test_mesh(self, detector, make_triangle_mesh, two_sections):
        mesh = Mesh(make_triangle_mesh([0]), look_at_path=Path(two_sections))
        keyframes = detector.sample_entity(mesh, fps=1, frame_count=3)
        assert keyframes[0].position == pytest.approx((0.0, 0.0, 0.0))
        assert keyframes[2].look_at == pytest.approx((1.0, 0.0, 0.0))

    def test_static_mesh_has_no_look_at(self, detector, make_triangle_mesh):
        keyframes = detector.sample_entity(Mesh(make_triangle_mesh([0])), fps=1, frame_count=1)
        assert keyframes[0].look_at is None

    def test_entity_cursors_are_untouched(self, detector, two_sections):
        camera = Camera(position_path=Path(two_sections), look_at_path=Path(two_sections))
        detector.sample_entity(camera, fps=4, frame_count=30)
        for path in camera.paths():
            assert path.current_section_index == 0
            assert path.elapsed_in_section == 0.0
