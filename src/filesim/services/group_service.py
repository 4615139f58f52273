from typing import List, Tuple
from filesim.core.models import Group


class GroupService:
    @staticmethod
    def remove_files_from_groups(groups: List[Group], file_paths: List[str]) -> List[Group]:
        """
        Removes files with the specified paths from all groups.

        Groups that contain fewer than 2 files after removal are discarded.
        Surviving groups keep their id, similarity and tier.

        Args:
            groups (list[Group]): List of groups to update.
            file_paths (list[str]): List of file paths to remove.

        Returns:
            list[Group]: Updated list of groups.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            filtered_files = [f for f in group.files if f.path not in removed]
            if len(filtered_files) >= 2:
                updated_groups.append(
                    Group(id=group.id, files=filtered_files, similarity=group.similarity, tier=group.tier)
                )
        return updated_groups

    @staticmethod
    def keep_only_one_file_per_group(groups: List[Group]) -> Tuple[List[str], List[Group]]:
        """
        Keeps the first file of each group (its anchor) and marks the rest for deletion.
        Returns:
            - List of file paths to be deleted
            - Updated list of groups
        """
        files_to_delete = []

        for group in groups:
            if len(group.files) > 1:
                for file in group.files[1:]:
                    files_to_delete.append(file.path)

        updated_groups = GroupService.remove_files_from_groups(groups, files_to_delete)

        return files_to_delete, updated_groups

    @staticmethod
    def calculate_space_savings(groups: List[Group], files_to_delete: List[str]) -> int:
        """Total bytes that deleting files_to_delete would free (unknown sizes count as 0)."""
        delete_set = set(files_to_delete)
        total_bytes = 0
        for group in groups:
            for file in group.files:
                if file.path in delete_set and file.size:
                    total_bytes += file.size
        return total_bytes
