def test_import_root_and_key_modules():
    import solution_packer

    import solution_packer.archiver
    import solution_packer.builder
    import solution_packer.cli
    import solution_packer.config
    import solution_packer.exceptions
    import solution_packer.folders
    import solution_packer.matriculation
    import solution_packer.types

    assert solution_packer.__version__
    assert "build_archives" in solution_packer.__all__
